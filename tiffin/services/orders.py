"""
Order Lifecycle Manager

Owns order records and their status changes.

Lifecycle:
    PENDING ──► CONFIRMED ──► OUT_FOR_DELIVERY ──► DELIVERED
       │            │
       └────────────┴──► CANCELLED

Terminal states: DELIVERED, CANCELLED.

Status changes are permissive by default: any caller past the role gate may
set any status, and only a CUSTOMER is additionally limited to their own
orders. The LIFECYCLE table is enforced only when strict transitions are
switched on (STRICT_STATUS_TRANSITIONS=true).

Known gaps kept as observed behaviour:
    - Line-item prices are taken from the caller, not from the catalog
    - A second delivery partner moving an order OUT_FOR_DELIVERY takes it
      over from the first one

Version: 1.0.0
"""

import logging
from typing import Iterable, List, Optional

from tiffin.core.config import get_settings
from tiffin.core.errors import InvalidTransition, NotAuthorized, OrderNotFound
from tiffin.models import Order, OrderItem, OrderStatus, PaymentStatus, Role, Session
from tiffin.store import DataStore

logger = logging.getLogger(__name__)


LIFECYCLE = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


def is_legal_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """Whether ``current -> new`` follows the lifecycle."""
    return new in LIFECYCLE[current]


def calculate_total(items: Iterable[OrderItem]) -> float:
    """Sum of unit price x quantity over the line items."""
    return sum(item.line_total for item in items)


class OrderLifecycleManager:
    """
    Creates, lists and transitions orders.

    Attributes:
        store: Shared data store
        strict_transitions: Reject status changes outside LIFECYCLE

    Example:
        >>> manager = OrderLifecycleManager(store)
        >>> order = manager.create_order(5, [OrderItem(price=10, quantity=2)], "1 Main St", "CARD")
        >>> order.total_amount
        20
    """

    def __init__(self, store: DataStore, strict_transitions: Optional[bool] = None):
        self.store = store
        if strict_transitions is None:
            strict_transitions = get_settings().strict_status_transitions
        self.strict_transitions = strict_transitions

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_order(self, order_id: int) -> Order:
        order = self.store.orders.get(order_id)
        if order is None:
            raise OrderNotFound()
        return order

    def list_orders(self, session: Session) -> List[Order]:
        """
        Orders visible to the caller.

        - ADMIN: every order
        - DELIVERY_PARTNER: CONFIRMED orders plus orders assigned to them
        - CUSTOMER: their own orders
        """
        orders = self.store.orders.list()

        if session.role == Role.ADMIN:
            return orders
        if session.role == Role.DELIVERY_PARTNER:
            return [
                o for o in orders
                if o.delivery_partner_id == session.user_id or o.status == OrderStatus.CONFIRMED
            ]
        return [o for o in orders if o.user_id == session.user_id]

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def create_order(
        self,
        customer_id: int,
        items: List[OrderItem],
        delivery_address: Optional[str] = None,
        payment_method: Optional[str] = None,
        special_instructions: Optional[str] = None,
    ) -> Order:
        """Place a PENDING, unpaid, unassigned order."""
        order = self.store.orders.add(
            user_id=customer_id,
            items=list(items),
            total_amount=calculate_total(items),
            delivery_address=delivery_address,
            payment_method=payment_method,
            special_instructions=special_instructions,
        )
        logger.info(f"📦 Order created: #{order.id} for user #{customer_id} ({order.total_amount:.2f})")
        return order

    def transition_status(self, session: Session, order_id: int, new_status: OrderStatus) -> Order:
        """
        Move an order to ``new_status``.

        A DELIVERY_PARTNER moving the order OUT_FOR_DELIVERY becomes its
        assigned partner in the same update.

        Raises:
            OrderNotFound: Unknown order id
            NotAuthorized: A CUSTOMER acting on someone else's order
            InvalidTransition: Strict mode only, the change skips or reverses the lifecycle
        """
        with self.store.orders.locked(order_id):
            order = self.get_order(order_id)

            if session.role == Role.CUSTOMER and order.user_id != session.user_id:
                logger.warning(
                    f"User #{session.user_id} denied status change on order #{order_id}"
                )
                raise NotAuthorized()

            if self.strict_transitions and not is_legal_transition(order.status, new_status):
                raise InvalidTransition(
                    f"Cannot move order from {order.status.value} to {new_status.value}"
                )

            order.status = new_status
            if new_status == OrderStatus.OUT_FOR_DELIVERY and session.role == Role.DELIVERY_PARTNER:
                order.delivery_partner_id = session.user_id

        logger.info(f"📦 Order #{order_id} status updated to {new_status.value}")
        return order

    def mark_paid(self, order_id: int) -> Order:
        """Record a verified payment: COMPLETED payment and CONFIRMED status together."""
        with self.store.orders.locked(order_id):
            order = self.get_order(order_id)
            order.payment_status = PaymentStatus.COMPLETED
            order.status = OrderStatus.CONFIRMED

        logger.info(f"💳 Order #{order_id} paid and confirmed")
        return order
