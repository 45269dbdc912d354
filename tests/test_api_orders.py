"""
Integration tests for menu, orders, delivery, admin, payments and
notifications, including the full customer-to-delivery walkthrough.
"""
import pytest

from tiffin.core.config import get_settings


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def place_order(client, headers, price=10, quantity=2):
    response = client.post("/api/orders", json={
        "items": [{"dishId": 1, "name": "Chicken Biryani", "price": price, "quantity": quantity}],
        "deliveryAddress": "456 Customer Ave",
        "paymentMethod": "CARD",
    }, headers=headers)
    assert response.status_code == 200
    return response.json()["order"]


def set_status(client, headers, order_id, status):
    return client.put(f"/api/orders/{order_id}/status", json={"status": status}, headers=headers)


# =============================================================================
# FULL WALKTHROUGH
# =============================================================================

def test_order_from_signup_to_delivery(client, admin_headers, partner_headers):
    signup = client.post("/api/auth/signup", json={
        "name": "A", "email": "a@x.com", "phone": "+1", "password": "pw",
    })
    assert signup.status_code == 200
    customer = auth(signup.json()["token"])

    assert client.get("/api/orders", headers=customer).json() == []

    order = place_order(client, customer, price=10, quantity=2)
    assert order["totalAmount"] == 20
    assert order["status"] == "PENDING"
    assert order["paymentStatus"] == "PENDING"
    assert order["deliveryPartnerId"] is None
    assert order["userId"] == signup.json()["user"]["id"]

    # Not visible to partners until confirmed
    assert client.get("/api/delivery/orders", headers=partner_headers).json() == []

    confirmed = set_status(client, admin_headers, order["id"], "CONFIRMED")
    assert confirmed.status_code == 200
    assert confirmed.json()["order"]["status"] == "CONFIRMED"

    available = client.get("/api/delivery/orders", headers=partner_headers).json()
    assert [o["id"] for o in available] == [order["id"]]

    picked = set_status(client, partner_headers, order["id"], "OUT_FOR_DELIVERY").json()["order"]
    assert picked["deliveryPartnerId"] == 3

    delivered = set_status(client, partner_headers, order["id"], "DELIVERED").json()["order"]
    assert delivered["status"] == "DELIVERED"

    stats = client.get("/api/delivery/stats", headers=partner_headers).json()
    assert stats["totalDeliveries"] == 1
    assert stats["totalEarnings"] == get_settings().delivery_rate
    assert stats["pendingOrders"] == 0

    mine = client.get("/api/orders", headers=customer).json()
    assert [o["status"] for o in mine] == ["DELIVERED"]

    admin_stats = client.get("/api/admin/stats", headers=admin_headers).json()
    assert admin_stats["totalOrders"] == 1
    assert admin_stats["totalRevenue"] == 20
    assert admin_stats["totalUsers"] == 2


# =============================================================================
# MENU
# =============================================================================

def test_menu_lists_available_dishes(client, store):
    store.dishes.get(2).is_available = False

    dishes = client.get("/api/menu/dishes").json()

    assert [d["id"] for d in dishes] == [1, 3, 4]
    assert dishes[0]["name"] == "Chicken Biryani"
    assert dishes[0]["isVegetarian"] is False
    assert dishes[0]["price"] == 15.99


def test_dish_lookup(client):
    assert client.get("/api/menu/dishes/4").json()["category"] == "BREAKFAST"

    missing = client.get("/api/menu/dishes/99")
    assert missing.status_code == 404
    assert missing.json()["error"] == "DishNotFound"


# =============================================================================
# ORDERS
# =============================================================================

def test_order_needs_items(client, customer_headers):
    response = client.post("/api/orders", json={"items": []}, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "InputValidation"


def test_unknown_status_value(client, customer_headers):
    order = place_order(client, customer_headers)
    response = set_status(client, customer_headers, order["id"], "SHIPPED")

    assert response.status_code == 400
    assert response.json()["error"] == "InputValidation"


def test_unknown_order(client, admin_headers):
    response = set_status(client, admin_headers, 999, "CONFIRMED")

    assert response.status_code == 404
    assert response.json()["message"] == "Order not found"


def test_customer_cannot_update_foreign_order(client, customer_headers):
    other = client.post("/api/auth/signup", json={
        "name": "B", "email": "b@x.com", "phone": "+2", "password": "pw",
    }).json()["token"]
    order = place_order(client, customer_headers)

    response = set_status(client, auth(other), order["id"], "CANCELLED")

    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized"
    assert client.get("/api/orders", headers=customer_headers).json()[0]["status"] == "PENDING"


def test_admin_sees_every_order(client, customer_headers, admin_headers):
    place_order(client, customer_headers)
    place_order(client, customer_headers, price=5, quantity=1)

    assert len(client.get("/api/orders", headers=admin_headers).json()) == 2


# =============================================================================
# DELIVERY
# =============================================================================

def test_partner_login(client):
    response = client.post("/api/delivery/auth/login", json={
        "email": "john@delivery.com", "password": "password",
    })

    assert response.status_code == 200
    assert response.json()["partner"]["id"] == 3


def test_partner_login_rejects_customers(client):
    response = client.post("/api/delivery/auth/login", json={
        "email": "user@test.com", "password": "password",
    })
    assert response.status_code == 401


def test_partner_profile(client, partner_headers):
    profile = client.get("/api/delivery/profile", headers=partner_headers).json()

    assert profile["name"] == "John Delivery"
    assert profile["isActive"] is True
    assert profile["vehicleNumber"]
    assert profile["totalDeliveries"] == 0


@pytest.mark.parametrize("path", ["/api/delivery/orders", "/api/delivery/stats", "/api/delivery/profile"])
def test_delivery_routes_reject_customers(client, customer_headers, path):
    assert client.get(path, headers=customer_headers).status_code == 403


# =============================================================================
# ADMIN
# =============================================================================

def test_admin_users_and_toggle(client, admin_headers):
    users = client.get("/api/admin/users", headers=admin_headers).json()
    assert [u["role"] for u in users] == ["CUSTOMER", "ADMIN", "DELIVERY_PARTNER"]
    assert "passwordHash" not in users[0]

    response = client.put("/api/admin/users/3/toggle-status", headers=admin_headers)
    assert response.json() == {"success": True, "user": {"id": 3, "isActive": False}}

    stats = client.get("/api/admin/stats", headers=admin_headers).json()
    assert stats["activeDeliveryPartners"] == 0

    login = client.post("/api/delivery/auth/login", json={
        "email": "john@delivery.com", "password": "password",
    })
    assert login.status_code == 401


def test_admin_toggle_unknown_user(client, admin_headers):
    response = client.put("/api/admin/users/404/toggle-status", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "UserNotFound"


# =============================================================================
# PAYMENTS
# =============================================================================

def test_create_payment(client, customer_headers):
    data = client.post("/api/payments", json={"amount": 25.5}, headers=customer_headers).json()

    assert data["id"].startswith("order_")
    assert data["amount"] == 2550
    assert data["currency"] == get_settings().default_currency
    assert data["status"] == "created"
    assert data["paymentMethod"] == get_settings().default_payment_method


def test_create_payment_order_alias(client, customer_headers):
    data = client.post(
        "/api/payments/create-order", json={"amount": 10, "currency": "USD"}, headers=customer_headers,
    ).json()

    assert data["amount"] == 1000
    assert data["currency"] == "USD"
    assert "paymentMethod" not in data


def test_payment_requires_positive_amount(client, customer_headers):
    response = client.post("/api/payments", json={"amount": 0}, headers=customer_headers)
    assert response.status_code == 400


def test_verify_payment_confirms_order(client, customer_headers, partner_headers):
    order = place_order(client, customer_headers)

    response = client.post("/api/payments/verify", json={
        "paymentId": "pay_123", "orderId": f"order_{order['id']}", "signature": "sig",
    }, headers=customer_headers)

    assert response.json() == {"success": True, "message": "Payment verified successfully"}
    updated = client.get("/api/orders", headers=customer_headers).json()[0]
    assert updated["status"] == "CONFIRMED"
    assert updated["paymentStatus"] == "COMPLETED"

    types = [n["type"] for n in client.get("/api/notifications", headers=customer_headers).json()]
    assert "PAYMENT" in types
    partner_types = [n["type"] for n in client.get("/api/notifications", headers=partner_headers).json()]
    assert partner_types == ["DELIVERY"]


def test_verify_payment_with_missing_signature(client, customer_headers):
    order = place_order(client, customer_headers)

    response = client.post("/api/payments/verify", json={
        "paymentId": "pay_123", "orderId": order["id"],
    }, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "VerificationFailed"
    assert client.get("/api/orders", headers=customer_headers).json()[0]["paymentStatus"] == "PENDING"


def test_payments_need_token(client):
    assert client.post("/api/payments", json={"amount": 5}).status_code == 401


# =============================================================================
# NOTIFICATIONS
# =============================================================================

def test_notifications_follow_order_events(client, customer_headers, admin_headers):
    order = place_order(client, customer_headers)
    set_status(client, admin_headers, order["id"], "CONFIRMED")

    mine = client.get("/api/notifications", headers=customer_headers).json()
    assert [n["title"] for n in mine] == ["Order Placed", "Order Confirmed"]
    assert all(n["orderId"] == order["id"] and n["read"] is False for n in mine)

    admin = client.get("/api/notifications", headers=admin_headers).json()
    assert [n["type"] for n in admin] == ["ADMIN"]
