"""Tests for authentication endpoints and the auth gate."""

from datetime import datetime, timedelta, timezone

import jwt


class TestRegister:
    def test_register_success(self, client, db):
        response = client.post(
            "/api/register",
            json={"email": "new@example.com", "name": "New User", "password": "password123"},
        )
        assert response.status_code == 201
        data = response.get_json()
        assert data["user"]["email"] == "new@example.com"
        assert "access_token" in data["token"]

    def test_register_duplicate_email(self, client, user):
        response = client.post(
            "/api/register",
            json={"email": "test@example.com", "name": "Dup", "password": "password123"},
        )
        assert response.status_code == 409

    def test_register_missing_fields(self, client, db):
        response = client.post("/api/register", json={})
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_register_invalid_email(self, client, db):
        response = client.post(
            "/api/register",
            json={"email": "not-an-email", "name": "Bad", "password": "password123"},
        )
        assert response.status_code == 400


class TestLogin:
    def test_login_success(self, client, user):
        response = client.post(
            "/api/login",
            json={"email": "test@example.com", "password": "password123"},
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["user"]["email"] == "test@example.com"
        assert data["token"]["token_type"] == "Bearer"

    def test_login_token_opens_api(self, client, user):
        login = client.post(
            "/api/login",
            json={"email": "test@example.com", "password": "password123"},
        )
        token = login.get_json()["token"]["access_token"]

        response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200

    def test_login_wrong_password(self, client, user):
        response = client.post(
            "/api/login",
            json={"email": "test@example.com", "password": "wrongpassword"},
        )
        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid credentials"

    def test_login_nonexistent_user(self, client, db):
        response = client.post(
            "/api/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )
        assert response.status_code == 401


class TestAuthGate:
    def test_get_user_authenticated(self, client, user, auth_headers):
        response = client.get("/api/user", headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json()["email"] == user.email

    def test_missing_header(self, client, db):
        assert client.get("/api/user").status_code == 401

    def test_malformed_token(self, client, db):
        response = client.get("/api/user", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid or expired token"

    def test_expired_token(self, client, app, user):
        payload = {
            "user_id": user.id,
            "exp": datetime.now(timezone.utc) - timedelta(hours=1),
        }
        token = jwt.encode(payload, app.config["JWT_SECRET_KEY"], algorithm="HS256")

        response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_without_user_id(self, client, app, db):
        token = jwt.encode({"email": "x@example.com"}, app.config["JWT_SECRET_KEY"], algorithm="HS256")

        response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_with_non_integer_user_id(self, client, app, user):
        payload = {
            "user_id": str(user.id),
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        token = jwt.encode(payload, app.config["JWT_SECRET_KEY"], algorithm="HS256")

        response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_issued_token_round_trips(self, app, user):
        from taskboard.services.auth import generate_token, user_id_from_token

        with app.app_context():
            assert user_id_from_token(generate_token(user)) == user.id


class TestLogout:
    def test_logout(self, client, auth_headers):
        response = client.post("/api/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json()["message"] == "Logged out successfully"

    def test_logout_unauthenticated(self, client, db):
        response = client.post("/api/logout")
        assert response.status_code == 401
