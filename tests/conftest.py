import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_kitchen4u.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["FRONTEND_URL"] = "http://localhost:5173/app"
os.environ["DB_LOG_QUERIES"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.main import app


@pytest.fixture(scope="function")
def sqlite_engine():
    """A throwaway SQLite engine in its own temporary directory."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    engine = create_engine(
        f"sqlite:///{test_db_path}",
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()
    try:
        if os.path.exists(test_db_path):
            os.remove(test_db_path)
        os.rmdir(temp_db_dir)
    except OSError as e:
        print(f"Cleanup failed: {e}")


@pytest.fixture(scope="function")
def broken_engine():
    """An engine whose connections always fail (its directory does not exist)."""
    missing_dir = os.path.join(tempfile.gettempdir(), "kitchen4u-missing", "nested")
    engine = create_engine(f"sqlite:///{missing_dir}/unreachable.db")
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def broken_db_client(broken_engine):
    """Test client whose database dependency can never connect."""
    BrokenSession = sessionmaker(autocommit=False, autoflush=False, bind=broken_engine)

    def override_get_db():
        db = BrokenSession()
        try:
            yield db
        finally:
            db.close()

    from app.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()
