from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    # PostgreSQL connection
    db_host: str = Field(default="localhost", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_name: str = Field(default="kitchen4u", alias="DB_NAME")
    db_user: str = Field(default="postgres", alias="DB_USER")
    db_password: str = Field(default="", alias="DB_PASSWORD")

    # Full URL override (tests point this at SQLite)
    database_url: str | None = Field(default=None, alias="DATABASE_URL")

    # Connection pool
    db_pool_max: int = Field(default=20, alias="DB_POOL_MAX")
    db_pool_idle_timeout: int = Field(default=30, alias="DB_POOL_IDLE_TIMEOUT")
    db_pool_connect_timeout: int = Field(default=2, alias="DB_POOL_CONNECT_TIMEOUT")
    db_log_queries: bool = Field(default=True, alias="DB_LOG_QUERIES")

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: LogLevel = Field(default="INFO", alias="LOG_LEVEL")

    # Frontend origin allowed by CORS
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    @field_validator("database_url", "frontend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("db_port", "port", mode="before")
    @classmethod
    def empty_port_to_default(cls, v: str | int | None, info) -> str | int:
        """Fall back to the default port when the variable is present but empty."""
        if v == "" or v is None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str:
        """Accept any case and the WARN shorthand; uvicorn only knows the full names."""
        if v == "" or v is None:
            return "INFO"
        level = str(v).strip().upper()
        if level == "WARN":
            return "WARNING"
        return level

    @property
    def sqlalchemy_database_url(self) -> URL:
        """
        Database URL handed to SQLAlchemy.

        DATABASE_URL wins when set; plain postgresql:// URLs are normalized to
        the psycopg3 driver. Otherwise the URL is assembled from the DB_* parts,
        with credentials passed through unescaped.
        """
        if self.database_url:
            url = make_url(self.database_url)
            if url.drivername == "postgresql":
                return url.set(drivername="postgresql+psycopg")
            return url

        return URL.create(
            drivername="postgresql+psycopg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    # Later files take priority; the process environment overrides both.
    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
