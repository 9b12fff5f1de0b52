import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from easypeasy.database import Base, get_db
from easypeasy.main import app

# One in-memory database shared by every connection of a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def open_session(db_session):
    """Factory for extra sessions on the test database, closed at teardown"""
    sessions = []

    def factory():
        session = TestingSessionLocal()
        sessions.append(session)
        return session

    yield factory

    for session in sessions:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan would create tables on the real engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def supplier(client):
    response = client.post(
        "/suppliers",
        json={"companyName": "Centro Civico Aurora", "email": "Info@Aurora.it", "city": "Milano"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def venue(client, supplier):
    response = client.post(
        f"/suppliers/{supplier['id']}/venues",
        json={"name": "Sole Studio", "city": "Milano", "capacity": 12, "color": "#ffaa00"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def lab_type(client):
    response = client.post(
        "/lab-types",
        json={"name": "Robotica", "code": "rb", "meetingCount": 6},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def lab(client, venue, lab_type):
    """Six weekly meetings from Monday 2024-01-01"""
    response = client.post(
        "/labs",
        json={
            "venueId": venue["id"],
            "labTypeId": lab_type["id"],
            "startDate": "2024-01-01",
            "startTime": "10:00",
            "listPrice": 120,
        },
    )
    assert response.status_code == 201
    return response.json()
