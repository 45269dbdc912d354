"""
Shared fixtures.

Every test gets its own seeded in-memory store. The API client is wired to
that store through FastAPI's dependency overrides, so unit tests and HTTP
tests can look at the same state.
"""
import pytest
from fastapi.testclient import TestClient

from tiffin.main import app
from tiffin.models import Role
from tiffin.seed import seed_demo_data
from tiffin.services.auth import CredentialService
from tiffin.services.notifications import reset_notification_service
from tiffin.services.payment import reset_payment_gateway
from tiffin.store import DataStore, get_store


CUSTOMER_ID = 1
ADMIN_ID = 2
PARTNER_ID = 3


@pytest.fixture
def store():
    """Fresh store holding the demo users (ids 1-3) and dishes (ids 1-4)."""
    return seed_demo_data(DataStore.in_memory())


@pytest.fixture
def credentials(store):
    return CredentialService(store)


@pytest.fixture
def client(store):
    """TestClient bound to the per-test store."""
    reset_payment_gateway()
    reset_notification_service()
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _token_for(credentials, user_id):
    return credentials.issue_token(credentials.store.users.get(user_id))


@pytest.fixture
def customer_token(credentials):
    return _token_for(credentials, CUSTOMER_ID)


@pytest.fixture
def admin_token(credentials):
    return _token_for(credentials, ADMIN_ID)


@pytest.fixture
def partner_token(credentials):
    return _token_for(credentials, PARTNER_ID)


@pytest.fixture
def second_partner(store):
    return store.users.add(
        name="Ravi Delivery",
        phone="+1234567899",
        email="ravi@delivery.com",
        role=Role.DELIVERY_PARTNER,
    )


@pytest.fixture
def customer_headers(customer_token):
    return {"Authorization": f"Bearer {customer_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def partner_headers(partner_token):
    return {"Authorization": f"Bearer {partner_token}"}
