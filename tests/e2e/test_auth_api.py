"""
API tests for registration, login and token verification
"""
from datetime import timedelta

import pytest
from jose import jwt

from expense_tracker.config import settings
from expense_tracker.core import security
from expense_tracker.core.rate_limit import limiter
from expense_tracker.models.user import User


@pytest.mark.e2e
class TestRegister:

    def test_register_returns_token_and_user(self, client, test_db):
        response = client.post(
            "/api/register",
            json={"username": "alice", "email": "alice@example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["user"]["username"] == "alice"
        assert data["user"]["email"] == "alice@example.com"
        assert "password" not in data["user"]

        stored = test_db.query(User).filter_by(username="alice").one()
        assert stored.hashed_password != "secret123"
        assert security.decode_access_token(data["token"]) == stored.id

    def test_duplicate_username_conflicts(self, client, register_user):
        register_user("alice")
        response = client.post(
            "/api/register",
            json={"username": "alice", "email": "other@example.com", "password": "secret123"},
        )
        assert response.status_code == 409
        assert response.json() == {"error": "Username or email already exists"}

    def test_duplicate_email_conflicts(self, client, register_user):
        register_user("alice", email="shared@example.com")
        response = client.post(
            "/api/register",
            json={"username": "alice2", "email": "shared@example.com", "password": "secret123"},
        )
        assert response.status_code == 409

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "a@example.com", "password": "secret123"},
            {"username": "alice", "email": "not-an-email", "password": "secret123"},
            {"username": "alice", "email": "a@example.com", "password": "123"},
            {"username": "al", "email": "a@example.com", "password": "secret123"},
        ],
    )
    def test_invalid_payload_is_bad_request(self, client, payload):
        response = client.post("/api/register", json=payload)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_password_over_bcrypt_limit_is_bad_request(self, client, test_db):
        response = client.post(
            "/api/register",
            json={"username": "alice", "email": "alice@example.com", "password": "x" * 80},
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("password:")
        assert "72 bytes" in response.json()["error"]
        assert test_db.query(User).count() == 0

    def test_multibyte_password_limit_counts_bytes(self, client):
        # 36 two-byte characters are 72 bytes, one more goes over
        response = client.post(
            "/api/register",
            json={"username": "alice", "email": "alice@example.com", "password": "ü" * 37},
        )
        assert response.status_code == 400

    def test_password_at_bcrypt_limit_can_log_in(self, client, register_user):
        password = "ü" * 36
        register_user("alice", password=password)
        response = client.post("/api/login", json={"username": "alice", "password": password})
        assert response.status_code == 200


@pytest.mark.e2e
class TestLogin:

    def test_login_token_identifies_user(self, client, register_user):
        registered = register_user("alice", password="secret123")

        response = client.post("/api/login", json={"username": "alice", "password": "secret123"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Logged in successfully"
        assert data["user"] == {"id": registered["user"]["id"], "username": "alice"}
        payload = jwt.decode(data["token"], settings.SECRET_KEY, algorithms=[security.ALGORITHM])
        assert payload["user_id"] == registered["user"]["id"]

    def test_wrong_password(self, client, register_user):
        register_user("alice", password="secret123")
        response = client.post("/api/login", json={"username": "alice", "password": "wrong-pass"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid username or password"}

    def test_unknown_user_gets_same_message(self, client):
        response = client.post("/api/login", json={"username": "nobody", "password": "secret123"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid username or password"}

    def test_missing_password(self, client):
        response = client.post("/api/login", json={"username": "alice"})
        assert response.status_code == 400


@pytest.mark.e2e
class TestLoginRateLimit:

    @pytest.fixture
    def low_login_limit(self, monkeypatch):
        monkeypatch.setattr(settings, "LOGIN_RATE_LIMIT", "2/minute")
        limiter.reset()
        yield
        limiter.reset()

    def test_third_attempt_is_rejected(self, client, register_user, low_login_limit):
        register_user("alice", password="secret123")
        credentials = {"username": "alice", "password": "secret123"}

        assert client.post("/api/login", json=credentials).status_code == 200
        assert client.post("/api/login", json=credentials).status_code == 200

        response = client.post("/api/login", json=credentials)
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded. Please try again later."}

    def test_failed_logins_count_too(self, client, low_login_limit):
        credentials = {"username": "nobody", "password": "secret123"}
        assert client.post("/api/login", json=credentials).status_code == 400
        assert client.post("/api/login", json=credentials).status_code == 400
        assert client.post("/api/login", json=credentials).status_code == 429

    def test_register_is_not_limited(self, client, register_user, low_login_limit):
        for name in ["alice", "bob", "carol"]:
            register_user(name)


@pytest.mark.e2e
class TestTokenVerification:

    def test_me_with_valid_token(self, client, register_user):
        registered = register_user("alice")
        response = client.get(
            "/api/me", headers={"Authorization": f"Bearer {registered['token']}"}
        )
        assert response.status_code == 200
        assert response.json() == registered["user"]

    def test_missing_header(self, client):
        response = client.get("/api/me")
        assert response.status_code == 401
        assert response.json() == {"error": "No token, authorization denied"}
        assert response.headers["www-authenticate"] == "Bearer"

    def test_malformed_token(self, client):
        response = client.get("/api/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
        assert response.json() == {"error": "Token is not valid"}

    def test_expired_token(self, client, register_user):
        user_id = register_user("alice")["user"]["id"]
        token = security.create_access_token({"user_id": user_id}, expires_delta=timedelta(minutes=-1))
        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_for_deleted_user(self, client, test_db, register_user):
        registered = register_user("alice")
        test_db.query(User).filter_by(id=registered["user"]["id"]).delete()
        test_db.commit()

        response = client.get(
            "/api/me", headers={"Authorization": f"Bearer {registered['token']}"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Token is not valid"}


@pytest.mark.e2e
def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
