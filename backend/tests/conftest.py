import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from tracker.database import get_db, get_engine, init_db
from tracker.main import app
from tracker.services.application_service import create_application


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_path = tmp_path / "TestTracker"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "db.sqlite"
    engine = get_engine(db_path)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def client(test_db):
    return TestClient(app)


@pytest.fixture
def make_application(db):
    """Insert an application through the record service with sensible defaults."""
    def _make(**overrides):
        data = {"company_name": "Acme Corp", "job_title": "Software Engineer"}
        data.update(overrides)
        return create_application(db, data)
    return _make
