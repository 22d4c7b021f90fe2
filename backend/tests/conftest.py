import pytest
from fastapi.testclient import TestClient

from notekeeper.config import Settings
from notekeeper.main import create_app

TEST_SECRET = "dev-secret-for-tests"


@pytest.fixture()
def settings(tmp_path):
    # isolate data dir per test; low bcrypt cost keeps the suite fast
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        jwt_secret=TEST_SECRET,
        jwt_exp_minutes=15,
        bcrypt_rounds=4,
    )


@pytest.fixture()
def client(settings):
    return TestClient(create_app(settings))


def signup(client, name="Ana", email="ana@x.com", password="pw123"):
    r = client.post("/api/v1/auth/signup", json={"name": name, "email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user_a(client):
    return signup(client, name="Alice", email="alice@example.com", password="alice-pw")


@pytest.fixture()
def user_b(client):
    return signup(client, name="Bob", email="bob@example.com", password="bob-pw")
