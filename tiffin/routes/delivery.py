"""
Delivery Partner Endpoints

    POST /api/delivery/auth/login   (public)
    GET  /api/delivery/orders       (DELIVERY_PARTNER)
    GET  /api/delivery/stats        (DELIVERY_PARTNER)
    GET  /api/delivery/profile      (DELIVERY_PARTNER)
"""

from typing import List

from fastapi import APIRouter, Depends

from tiffin.core.config import get_logger
from tiffin.dependencies import get_credential_service, get_delivery_view, require_roles
from tiffin.models import Role, Session
from tiffin.schemas import (
    DeliveryProfile,
    DeliveryStats,
    LoginRequest,
    OrderOut,
    PartnerAuthResponse,
    PartnerOut,
)
from tiffin.services.auth import CredentialService
from tiffin.services.delivery import DeliveryAssignmentView

logger = get_logger(__name__)

router = APIRouter(prefix="/api/delivery", tags=["Delivery"])

require_partner = require_roles(Role.DELIVERY_PARTNER)


@router.post("/auth/login", response_model=PartnerAuthResponse)
async def partner_login(
    body: LoginRequest,
    credentials: CredentialService = Depends(get_credential_service),
) -> PartnerAuthResponse:
    logger.info(f"🚚 Delivery partner login attempt: {body.email}")
    result = credentials.authenticate_by_password(
        body.email, body.password, role=Role.DELIVERY_PARTNER
    )
    user = result.user
    return PartnerAuthResponse(
        token=result.token,
        partner=PartnerOut(id=user.id, name=user.name, email=user.email, phone=user.phone),
    )


@router.get("/orders", response_model=List[OrderOut])
async def partner_orders(
    session: Session = Depends(require_partner),
    view: DeliveryAssignmentView = Depends(get_delivery_view),
) -> List[OrderOut]:
    logger.info(f"🚚 Delivery partner {session.name} fetching orders")
    return [OrderOut.from_order(o) for o in view.available_for_partner(session.user_id)]


@router.get("/stats", response_model=DeliveryStats)
async def partner_stats(
    session: Session = Depends(require_partner),
    view: DeliveryAssignmentView = Depends(get_delivery_view),
) -> DeliveryStats:
    return DeliveryStats(**view.partner_stats(session.user_id))


@router.get("/profile", response_model=DeliveryProfile)
async def partner_profile(
    session: Session = Depends(require_partner),
    view: DeliveryAssignmentView = Depends(get_delivery_view),
) -> DeliveryProfile:
    return DeliveryProfile(**view.partner_profile(session.user_id))
