import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="contenthub-tests-")

# Settings are read once at import time
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'contenthub.db')}"
os.environ["UPLOADS_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["APP_URL"] = "http://testserver"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["ADMIN_EMAIL"] = "admin@contenthub.io"
os.environ["ADMIN_PASSWORD"] = "admin-secret"
os.environ["STORAGE_PROVIDER"] = "local"

import pytest
from fastapi.testclient import TestClient
from main import app
from contenthub.config.database import Base, SessionLocal, engine
from contenthub.models.language import Language
from contenthub.seed import run_seed

ADMIN_EMAIL = "admin@contenthub.io"
ADMIN_PASSWORD = "admin-secret"

@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        run_seed(session)
        yield session
    finally:
        session.close()

@pytest.fixture
def client(db):
    return TestClient(app)

def _login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

@pytest.fixture
def admin_headers(client):
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)

@pytest.fixture
def author_headers(client):
    response = client.post("/api/auth/register", json={
        "email": "writer@contenthub.io",
        "password": "writer-secret",
        "first_name": "Ada",
        "last_name": "Writer",
    })
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

@pytest.fixture
def languages(db):
    return {language.code: language.id for language in db.query(Language).all()}

@pytest.fixture
def blog(client, admin_headers):
    response = client.post("/api/admin/blogs/", json={"name": "Engineering Notes"}, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()

@pytest.fixture
def login_as(client):
    def login(email, password):
        return _login(client, email, password)
    return login
