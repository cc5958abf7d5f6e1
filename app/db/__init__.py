from app.db.base import SessionLocal, engine

__all__ = ["SessionLocal", "engine"]
