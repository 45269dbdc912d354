"""
Order Endpoints

    GET  /api/orders              role-scoped listing
    POST /api/orders              place an order
    PUT  /api/orders/{id}/status  change an order's status
"""

from typing import List

from fastapi import APIRouter, Depends

from tiffin.core.config import get_logger
from tiffin.dependencies import get_inbox, get_order_manager, require_session
from tiffin.models import Session
from tiffin.schemas import OrderCreate, OrderEnvelope, OrderOut, StatusUpdate
from tiffin.services.notifications import NotificationInbox
from tiffin.services.orders import OrderLifecycleManager

logger = get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("", response_model=List[OrderOut])
async def list_orders(
    session: Session = Depends(require_session),
    orders: OrderLifecycleManager = Depends(get_order_manager),
) -> List[OrderOut]:
    visible = orders.list_orders(session)
    logger.info(f"📦 Fetching {len(visible)} orders for {session.role.value}")
    return [OrderOut.from_order(o) for o in visible]


@router.post("", response_model=OrderEnvelope)
async def create_order(
    body: OrderCreate,
    session: Session = Depends(require_session),
    orders: OrderLifecycleManager = Depends(get_order_manager),
    inbox: NotificationInbox = Depends(get_inbox),
) -> OrderEnvelope:
    order = orders.create_order(
        customer_id=session.user_id,
        items=[item.to_item() for item in body.items],
        delivery_address=body.delivery_address,
        payment_method=body.payment_method,
        special_instructions=body.special_instructions,
    )
    inbox.order_placed(order)
    return OrderEnvelope(order=OrderOut.from_order(order))


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_order_status(
    order_id: int,
    body: StatusUpdate,
    session: Session = Depends(require_session),
    orders: OrderLifecycleManager = Depends(get_order_manager),
    inbox: NotificationInbox = Depends(get_inbox),
) -> OrderEnvelope:
    order = orders.transition_status(session, order_id, body.status)
    inbox.status_changed(order)
    return OrderEnvelope(order=OrderOut.from_order(order))
