"""
FastAPI Dependencies

Wires services to the shared store and turns the Authorization header
into an explicit Session:

    Authorization: Bearer <token>
        missing         -> 401 AccessTokenRequired
        non-Bearer      -> 403 InvalidToken
        invalid/expired -> 403 InvalidToken
        wrong role      -> 403 InsufficientPermissions
"""

from typing import Callable, Optional

from fastapi import Depends, Header

from tiffin.core.errors import InvalidToken
from tiffin.models import Role, Session
from tiffin.services.admin import AdminService
from tiffin.services.auth import CredentialService
from tiffin.services.authorization import authorize
from tiffin.services.catalog import CatalogService
from tiffin.services.delivery import DeliveryAssignmentView
from tiffin.services.notifications import NotificationInbox, get_notification_service
from tiffin.services.orders import OrderLifecycleManager
from tiffin.services.payment import PaymentProcessor, get_payment_gateway
from tiffin.store import DataStore, get_store


# =============================================================================
# SERVICES
# =============================================================================

def get_credential_service(store: DataStore = Depends(get_store)) -> CredentialService:
    return CredentialService(store, sms=get_notification_service())


def get_catalog_service(store: DataStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_order_manager(store: DataStore = Depends(get_store)) -> OrderLifecycleManager:
    return OrderLifecycleManager(store)


def get_delivery_view(store: DataStore = Depends(get_store)) -> DeliveryAssignmentView:
    return DeliveryAssignmentView(store)


def get_admin_service(store: DataStore = Depends(get_store)) -> AdminService:
    return AdminService(store)


def get_inbox(store: DataStore = Depends(get_store)) -> NotificationInbox:
    return NotificationInbox(store)


def get_payment_processor(
    orders: OrderLifecycleManager = Depends(get_order_manager),
) -> PaymentProcessor:
    return PaymentProcessor(get_payment_gateway(), orders)


# =============================================================================
# AUTHENTICATION
# =============================================================================

def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Extract the token from ``Authorization: Bearer <token>``."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        raise InvalidToken()
    return token.strip() or None


def require_session(
    token: Optional[str] = Depends(bearer_token),
    credentials: CredentialService = Depends(get_credential_service),
) -> Session:
    return credentials.resolve_token(token)


def require_roles(*roles: Role) -> Callable[..., Session]:
    """
    Dependency factory applying the role gate.

    Example:
        @router.get("/stats")
        async def stats(session: Session = Depends(require_roles(Role.ADMIN))):
            ...
    """
    def dependency(session: Session = Depends(require_session)) -> Session:
        return authorize(session, roles)

    return dependency
