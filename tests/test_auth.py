"""
Tests for Authentication

Tests the auth endpoints:
- POST /api/auth/signup
- POST /api/auth/login
- GET /api/auth/me

And bearer token handling shared by every protected route:
- Missing token -> 401
- Invalid, expired or wrong-type token -> 403
"""

from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient
from jose import jwt

from bookreview.config import get_settings
from bookreview.models.user import User
from bookreview.services.security import ALGORITHM, create_access_token


# =============================================================================
# Signup
# =============================================================================


class TestSignup:
    """Tests for POST /api/auth/signup"""

    def test_signup_success(self, client: TestClient):
        response = client.post(
            "/api/auth/signup",
            json={"username": "reader", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["username"] == "reader"
        assert isinstance(data["id"], int)
        assert "password" not in data
        assert "hashed_password" not in data

    def test_signup_lowercases_username(self, client: TestClient):
        response = client.post(
            "/api/auth/signup",
            json={"username": "  Reader ", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["username"] == "reader"

    def test_signup_duplicate_username(self, client: TestClient, sample_user: User):
        response = client.post(
            "/api/auth/signup",
            json={"username": "TestUser", "password": "whatever1"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {
            "detail": "User already exists",
            "kind": "duplicate",
        }

    def test_signup_missing_password(self, client: TestClient):
        response = client.post("/api/auth/signup", json={"username": "reader"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["kind"] == "validation_error"

    def test_signup_empty_username(self, client: TestClient):
        response = client.post(
            "/api/auth/signup",
            json={"username": "   ", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login
# =============================================================================


class TestLogin:
    """Tests for POST /api/auth/login"""

    def test_login_success(self, client: TestClient, sample_user: User):
        response = client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == get_settings().access_token_expire_minutes * 60

        payload = jwt.decode(
            data["token"], get_settings().secret_key, algorithms=[ALGORITHM]
        )
        assert payload["sub"] == str(sample_user.id)
        assert payload["username"] == "testuser"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_login_is_case_insensitive_on_username(
        self, client: TestClient, sample_user: User
    ):
        response = client.post(
            "/api/auth/login",
            json={"username": "TESTUSER", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, client: TestClient, sample_user: User):
        response = client.post(
            "/api/auth/login",
            json={"username": "testuser", "password": "wrong"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {
            "detail": "Invalid username or password",
            "kind": "authentication_error",
        }

    def test_login_unknown_user_matches_wrong_password(self, client: TestClient):
        response = client.post(
            "/api/auth/login",
            json={"username": "ghost", "password": "whatever"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid username or password"

    def test_login_missing_fields(self, client: TestClient):
        response = client.post("/api/auth/login", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_signup_then_login_then_me(self, client: TestClient):
        client.post(
            "/api/auth/signup",
            json={"username": "flow", "password": "flowpass1"},
        )
        login = client.post(
            "/api/auth/login",
            json={"username": "flow", "password": "flowpass1"},
        )
        token = login.json()["token"]

        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "flow"


# =============================================================================
# Bearer Token Handling
# =============================================================================


class TestBearerToken:
    """Token failures on a protected route (GET /api/auth/me)"""

    def test_me_with_valid_token(
        self, client: TestClient, sample_user: User, auth_header
    ):
        response = client.get("/api/auth/me", headers=auth_header(sample_user))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": sample_user.id, "username": "testuser"}

    def test_missing_token_is_401(self, client: TestClient):
        response = client.get("/api/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {
            "detail": "Token missing",
            "kind": "authentication_error",
        }

    def test_garbage_token_is_403(self, client: TestClient):
        response = client.get(
            "/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Invalid token"

    def test_expired_token_is_403(self, client: TestClient, sample_user: User):
        token = create_access_token(
            {"sub": str(sample_user.id), "username": sample_user.username},
            expires_delta=timedelta(minutes=-1),
        )

        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_token_signed_with_other_key_is_403(
        self, client: TestClient, sample_user: User
    ):
        token = jwt.encode(
            {"sub": str(sample_user.id), "type": "access"},
            "some-other-secret-key-that-is-long-enough",
            algorithm=ALGORITHM,
        )

        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_token_of_wrong_type_is_403(self, client: TestClient, sample_user: User):
        token = jwt.encode(
            {"sub": str(sample_user.id), "type": "refresh"},
            get_settings().secret_key,
            algorithm=ALGORITHM,
        )

        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_token_for_deleted_user_is_403(self, client: TestClient):
        token = create_access_token({"sub": "9999", "username": "ghost"})

        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_other_scheme_is_403(self, client: TestClient, sample_user: User):
        token = create_access_token(
            {"sub": str(sample_user.id), "username": sample_user.username}
        )

        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Basic {token}"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {
            "detail": "Invalid token",
            "kind": "authentication_error",
        }

    def test_bearer_without_token_is_401(self, client: TestClient):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Token missing"

    def test_scheme_is_case_insensitive(
        self, client: TestClient, sample_user: User
    ):
        token = create_access_token(
            {"sub": str(sample_user.id), "username": sample_user.username}
        )

        response = client.get(
            "/api/auth/me", headers={"Authorization": f"bearer {token}"}
        )

        assert response.status_code == status.HTTP_200_OK
