import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest
from jose import jwt

from checkout_api import database
from checkout_api.config import ALGORITHM, SECRET_KEY
from checkout_api.core.auth import (
    authenticate,
    create_access_token,
    find_user_by_email,
    list_users,
    register_user,
    verify_token,
)


class TestFindUserByEmail:
    def test_existing_user(self):
        user = find_user_by_email("alice@email.com")

        assert user.id == 1
        assert user.name == "Alice"
        assert user.password == "123456"

    def test_second_user(self):
        assert find_user_by_email("bob@email.com").id == 2

    def test_unknown_email(self):
        assert find_user_by_email("nobody@email.com") is None

    def test_is_case_sensitive(self):
        assert find_user_by_email("ALICE@email.com") is None

    @pytest.mark.parametrize("email", ["", None])
    def test_empty_email(self, email):
        assert find_user_by_email(email) is None


class TestRegisterUser:
    def test_returns_public_view(self):
        result = register_user("Test User", "test@example.com", "testpass123")

        assert result == {"name": "Test User", "email": "test@example.com"}

    def test_stores_user_with_next_id(self):
        register_user("Test User", "test@example.com", "testpass123")

        stored = find_user_by_email("test@example.com")
        assert stored.id == 3
        assert stored.password == "testpass123"

    def test_duplicate_email(self):
        assert register_user("Alice Clone", "alice@email.com", "x") is None
        assert len(database.users) == 2

    def test_sequential_ids(self):
        initial = len(database.users)
        register_user("One", "one@test.com", "1")
        register_user("Two", "two@test.com", "2")

        assert find_user_by_email("one@test.com").id == initial + 1
        assert find_user_by_email("two@test.com").id == initial + 2

    def test_existing_users_untouched(self):
        before = [u.model_copy() for u in database.users]
        register_user("Test User", "test@example.com", "pw")

        assert database.users[: len(before)] == before
        assert database.users[-1].email == "test@example.com"

    def test_special_characters(self):
        result = register_user("José María", "josé@test.com", "páss123!@#")

        assert result["name"] == "José María"
        assert find_user_by_email("josé@test.com").password == "páss123!@#"

    def test_empty_name_and_password_accepted(self):
        assert register_user("", "empty@test.com", "")["name"] == ""
        assert find_user_by_email("empty@test.com").password == ""


class TestAuthenticate:
    def test_valid_credentials(self):
        result = authenticate("alice@email.com", "123456")

        assert isinstance(result["token"], str)
        assert result["token"]

    def test_unknown_email(self):
        assert authenticate("nobody@email.com", "123456") is None

    def test_wrong_password(self):
        assert authenticate("alice@email.com", "wrong") is None

    @pytest.mark.parametrize("email, password", [("", ""), (None, None), ("alice@email.com", None)])
    def test_empty_credentials(self, email, password):
        assert authenticate(email, password) is None

    def test_token_claims(self):
        token = authenticate("bob@email.com", "123456")["token"]
        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])

        assert claims["id"] == 2
        assert claims["email"] == "bob@email.com"
        assert claims["exp"] - claims["iat"] == 3600
        assert abs(claims["exp"] - (time.time() + 3600)) < 10


class TestVerifyToken:
    def test_valid_token(self):
        token = create_access_token(find_user_by_email("alice@email.com"))
        claims = verify_token(token)

        assert claims["id"] == 1
        assert claims["email"] == "alice@email.com"
        assert "iat" in claims and "exp" in claims

    def test_invalid_token(self):
        assert verify_token("invalid.jwt.token") is None

    def test_expired_token(self):
        token = create_access_token(find_user_by_email("alice@email.com"), expires_delta=timedelta(hours=-1))
        assert verify_token(token) is None

    def test_wrong_secret(self, make_token):
        assert verify_token(make_token(secret="another-secret")) is None

    @pytest.mark.parametrize("token", ["", None])
    def test_empty_token(self, token):
        assert verify_token(token) is None


def test_list_users_hides_passwords():
    assert list_users() == [
        {"id": 1, "name": "Alice", "email": "alice@email.com"},
        {"id": 2, "name": "Bob", "email": "bob@email.com"},
    ]


class TestConcurrentRegistration:
    def test_same_email_registers_once(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda i: register_user(f"User {i}", "race@test.com", "pw"), range(32)))

        assert sum(r is not None for r in results) == 1
        assert [u.email for u in database.users].count("race@test.com") == 1

    def test_distinct_emails_get_unique_sequential_ids(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: register_user(f"User {i}", f"user{i}@test.com", "pw"), range(32)))

        assert [u.id for u in database.users] == list(range(1, 35))
