"""
Integration tests for the authentication endpoints and the bearer-token
gate in front of protected routes.
"""
import pytest

from tiffin.core.config import get_settings


def test_root_and_health(client):
    assert client.get("/").json()["health"] == "/health"

    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["services"] == {"payment": "healthy", "notifications": "healthy"}


def test_login_success(client):
    response = client.post("/api/auth/login", json={"email": "user@test.com", "password": "password"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"] == {
        "id": 1,
        "name": "Test User",
        "email": "user@test.com",
        "phone": "+1234567890",
        "role": "CUSTOMER",
    }


def test_login_wrong_password(client):
    response = client.post("/api/auth/login", json={"email": "user@test.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "InvalidCredentials",
        "message": "Invalid credentials",
    }


def test_login_deactivated(client, store):
    store.users.toggle_active(1)
    response = client.post("/api/auth/login", json={"email": "user@test.com", "password": "password"})

    assert response.status_code == 401
    assert response.json()["message"] == "Account deactivated"


def test_login_missing_field(client):
    response = client.post("/api/auth/login", json={"email": "user@test.com"})

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "InputValidation"
    assert "password" in data["message"]


def test_signup(client):
    response = client.post("/api/auth/signup", json={
        "name": "Asha",
        "email": "asha@test.com",
        "phone": "+15550001111",
        "password": "pw",
    })

    assert response.status_code == 200
    assert response.json()["user"]["id"] == 4
    assert response.json()["user"]["role"] == "CUSTOMER"


@pytest.mark.parametrize("payload,error", [
    ({"name": "Dup", "email": "user@test.com", "phone": "+15550001111", "password": "pw"}, "UserAlreadyExists"),
    ({"name": "Dup", "email": "fresh@test.com", "phone": "+1234567890", "password": "pw"}, "UserAlreadyExists"),
    ({"name": "Bad", "email": "not-an-email", "phone": "+15550001111", "password": "pw"}, "InputValidation"),
])
def test_signup_rejected(client, payload, error):
    response = client.post("/api/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == error


def test_otp_flow_creates_user(client):
    phone = "+15550002222"
    sent = client.post("/api/auth/send-otp", json={"phone": phone}).json()
    assert sent["success"] is True
    assert get_settings().should_expose_otp
    assert sent["otp"]

    response = client.post("/api/auth/verify-otp", json={"phone": phone, "otp": sent["otp"]})

    assert response.status_code == 200
    data = response.json()
    assert data["isNewUser"] is True
    assert data["phone"] == phone
    assert data["name"] == "User 4"

    orders = client.get("/api/orders", headers={"Authorization": f"Bearer {data['token']}"})
    assert orders.status_code == 200
    assert orders.json() == []


def test_otp_reuse_rejected(client):
    phone = "+15550002222"
    code = client.post("/api/auth/send-otp", json={"phone": phone}).json()["otp"]
    client.post("/api/auth/verify-otp", json={"phone": phone, "otp": code})

    response = client.post("/api/auth/verify-otp", json={"phone": phone, "otp": code})

    assert response.status_code == 401
    assert response.json()["error"] == "OtpNotFound"


def test_otp_mismatch(client):
    phone = "+15550002222"
    client.post("/api/auth/send-otp", json={"phone": phone})

    response = client.post("/api/auth/verify-otp", json={"phone": phone, "otp": "not-it"})

    assert response.status_code == 401
    assert response.json()["error"] == "OtpMismatch"


# =============================================================================
# TOKEN GATE
# =============================================================================

def test_missing_token_is_401(client):
    response = client.get("/api/orders")

    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


def test_non_bearer_scheme_is_invalid_token(client):
    response = client.get("/api/orders", headers={"Authorization": "Basic dXNlcjpwYXNz"})

    assert response.status_code == 403
    assert response.json()["error"] == "InvalidToken"


def test_invalid_token_is_403(client):
    response = client.get("/api/orders", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 403
    assert response.json()["message"] == "Invalid token"


def test_wrong_role_is_403(client, customer_headers):
    response = client.get("/api/admin/stats", headers=customer_headers)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "error": "InsufficientPermissions",
        "message": "Insufficient permissions",
    }


def test_admin_routes_need_token(client):
    assert client.get("/api/admin/users").status_code == 401
