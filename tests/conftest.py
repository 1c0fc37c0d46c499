"""
Gatekeeper - Test Configuration and Fixtures
"""
import pytest
from fastapi.testclient import TestClient

from gatekeeper.config import Settings
from gatekeeper.main import create_app
from gatekeeper.models import User


TEST_USER = {
    'username': 'bob',
    'email': 'bob@x.com',
    'password': 'secret',
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings backed by a throwaway SQLite database"""
    return Settings(
        session_secret='test-session-secret',
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        log_level='DEBUG',
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client that runs the app lifespan and does not follow redirects"""
    with TestClient(app, follow_redirects=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db(app, client):
    """ORM session on the app's database (tables exist once the client started)"""
    session = app.state.database.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def registered_user(client, db) -> User:
    """Sign TEST_USER up through the HTTP surface"""
    response = client.post('/createUser', data=TEST_USER)
    assert response.status_code == 302
    return db.query(User).filter(User.email == TEST_USER['email']).one()


@pytest.fixture
def logged_in_client(client, registered_user) -> TestClient:
    response = client.post(
        '/loginUser',
        data={'email': TEST_USER['email'], 'password': TEST_USER['password']},
    )
    assert response.status_code == 302
    assert response.headers['location'] == '/'
    return client
