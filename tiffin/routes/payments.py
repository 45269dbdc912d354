"""
Payment Endpoints (any signed-in user)

    POST /api/payments               create a gateway order
    POST /api/payments/create-order  same, alternate path
    POST /api/payments/verify        verify a payment and confirm the order
"""

from typing import Any

from fastapi import APIRouter, Depends

from tiffin.core.config import get_logger, get_settings
from tiffin.dependencies import get_inbox, get_payment_processor, require_session
from tiffin.models import Session
from tiffin.schemas import MessageResponse, PaymentCreateRequest, PaymentVerifyRequest
from tiffin.services.notifications import NotificationInbox
from tiffin.services.payment import PaymentProcessor

logger = get_logger(__name__)

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.post("")
async def create_payment(
    body: PaymentCreateRequest,
    session: Session = Depends(require_session),
    payments: PaymentProcessor = Depends(get_payment_processor),
) -> dict[str, Any]:
    """Create a gateway order; the payment method defaults to the configured one."""
    payment_order = await payments.create_payment_order(
        amount=body.amount,
        currency=body.currency,
        payment_method=body.payment_method or get_settings().default_payment_method,
    )
    logger.info(f"💳 Payment order {payment_order.id} created for user #{session.user_id}")
    return payment_order.to_dict()


@router.post("/create-order")
async def create_payment_order(
    body: PaymentCreateRequest,
    session: Session = Depends(require_session),
    payments: PaymentProcessor = Depends(get_payment_processor),
) -> dict[str, Any]:
    payment_order = await payments.create_payment_order(amount=body.amount, currency=body.currency)
    logger.info(f"💳 Payment order {payment_order.id} created for user #{session.user_id}")
    return payment_order.to_dict()


@router.post("/verify", response_model=MessageResponse)
async def verify_payment(
    body: PaymentVerifyRequest,
    session: Session = Depends(require_session),
    payments: PaymentProcessor = Depends(get_payment_processor),
    inbox: NotificationInbox = Depends(get_inbox),
) -> MessageResponse:
    order = await payments.verify_payment(body.payment_id, body.order_id, body.signature)
    if order is not None:
        inbox.payment_completed(order)
    return MessageResponse(success=True, message="Payment verified successfully")
