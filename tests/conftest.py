from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from checkout_api.config import ALGORITHM, SECRET_KEY
from checkout_api.database import init_db


@pytest.fixture(autouse=True)
def reset_store():
    """Every test starts from the seeded users (Alice and Bob)."""
    init_db()
    yield
    init_db()


@pytest.fixture()
def client():
    from checkout_api.main import app

    return TestClient(app)


@pytest.fixture()
def make_token():
    def _make_token(claims=None, expires_in=timedelta(hours=1), secret=SECRET_KEY):
        now = datetime.now(timezone.utc)
        to_encode = dict(claims or {"id": 1, "email": "alice@email.com"})
        to_encode.update({"iat": now, "exp": now + expires_in})
        return jwt.encode(to_encode, secret, algorithm=ALGORITHM)

    return _make_token


@pytest.fixture()
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}
