"""End-to-end tests for the local account flow."""

from tests.conftest import TEST_PASSWORD


def latest_code(outbox) -> str:
    return outbox[-1].body.rsplit(" ", 1)[-1]


class TestRegistration:
    """POST /api/auth/register."""

    def test_register(self, client, outbox):
        response = client.post(
            "/api/auth/register",
            json={"email": "Alice@Example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "alice@example.com"
        assert data["user_id"]
        assert outbox[-1].to == "alice@example.com"
        assert len(latest_code(outbox)) == 6

    def test_register_duplicate(self, client):
        body = {"email": "alice@example.com", "password": TEST_PASSWORD}
        client.post("/api/auth/register", json=body)

        response = client.post("/api/auth/register", json=body)

        assert response.status_code == 409
        assert response.json()["detail"] == "Email already registered"

    def test_register_invalid_email(self, client):
        response = client.post(
            "/api/auth/register", json={"email": "nope", "password": TEST_PASSWORD}
        )

        assert response.status_code == 400

    def test_register_short_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": "short"},
        )

        assert response.status_code == 400
        assert "at least 8" in response.json()["detail"]

    def test_register_rejects_address_login_rejects(self, client, outbox):
        """Consecutive dots fail the same rule the login form applies."""
        response = client.post(
            "/api/auth/register",
            json={"email": "john..doe@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 400
        assert outbox == []

    def test_long_password_registers_and_logs_in(self, client, outbox):
        password = "p" * 80
        client.post(
            "/api/auth/register",
            json={"email": "long@example.com", "password": password},
        )
        client.post(
            "/api/auth/verify",
            json={"email": "long@example.com", "code": latest_code(outbox)},
        )

        response = client.post(
            "/api/auth/login",
            json={"email": "long@example.com", "password": password},
        )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "long@example.com"

    def test_register_missing_fields(self, client):
        response = client.post("/api/auth/register", json={})

        assert response.status_code == 400


class TestLocalAuthFlow:
    """Register, verify, log in, check status, log out."""

    def test_full_flow(self, client, outbox):
        # Register
        client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )

        # Login refused before verification
        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )
        assert response.status_code == 401

        # Verify
        response = client.post(
            "/api/auth/verify",
            json={"email": "alice@example.com", "code": latest_code(outbox)},
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Email verified successfully"

        # Login sets the session cookie; the handle is not in the body
        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["email"] == "alice@example.com"
        assert "session_id" not in data
        set_cookie = response.headers["set-cookie"]
        assert "session_id=" in set_cookie
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()

        # Status
        response = client.get("/api/auth/status")
        assert response.json()["authenticated"] is True
        assert response.json()["user"]["is_verified"] is True

        # Logout
        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json()["message"] == "Logout successful"

        response = client.get("/api/auth/status")
        assert response.json() == {"authenticated": False, "user": None}

    def test_wrong_password(self, client, outbox):
        client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )
        client.post(
            "/api/auth/verify",
            json={"email": "alice@example.com", "code": latest_code(outbox)},
        )

        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Incorrect email or password"
        assert "set-cookie" not in response.headers

    def test_verify_wrong_code(self, client, outbox):
        client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )
        wrong = "000000" if latest_code(outbox) != "000000" else "111111"

        response = client.post(
            "/api/auth/verify", json={"email": "alice@example.com", "code": wrong}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid verification code"

    def test_verify_unknown_email(self, client):
        response = client.post(
            "/api/auth/verify", json={"email": "nobody@example.com", "code": "123456"}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_verify_malformed_code(self, client):
        response = client.post(
            "/api/auth/verify", json={"email": "alice@example.com", "code": "12"}
        )

        assert response.status_code == 400

    def test_resend_code(self, client, outbox):
        client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )

        response = client.post(
            "/api/auth/resend-code", json={"email": "alice@example.com"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Verification code sent"
        assert len(outbox) == 2

        response = client.post(
            "/api/auth/verify",
            json={"email": "alice@example.com", "code": latest_code(outbox)},
        )
        assert response.status_code == 200

        response = client.post(
            "/api/auth/resend-code", json={"email": "alice@example.com"}
        )
        assert response.status_code == 409

    def test_anonymous_logout(self, client):
        response = client.get("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Logout successful"

    def test_status_with_unknown_cookie(self, client):
        client.cookies.set("session_id", "forged")

        response = client.get("/api/auth/status")

        assert response.json()["authenticated"] is False

    def test_mail_outage_is_bad_gateway(self, client, mail_sender):
        mail_sender.fail = True

        response = client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 502
