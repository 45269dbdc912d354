"""
In-App Notification Inbox

Publishes notifications for order and payment events and lists them per
caller:
    - notifications addressed to the caller's user id
    - ADMIN broadcasts for admins
    - DELIVERY broadcasts for delivery partners
"""

import logging
from typing import List

from tiffin.models import Notification, NotificationType, Order, OrderStatus, Role, Session
from tiffin.store import DataStore

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    OrderStatus.PENDING: ("Order Placed", "Your order has been placed successfully"),
    OrderStatus.CONFIRMED: ("Order Confirmed", "Your order has been confirmed by the restaurant"),
    OrderStatus.OUT_FOR_DELIVERY: ("Out for Delivery", "Your order is out for delivery"),
    OrderStatus.DELIVERED: ("Order Delivered", "Your order has been delivered successfully"),
    OrderStatus.CANCELLED: ("Order Cancelled", "Your order has been cancelled"),
}

BROADCAST_AUDIENCE = {
    NotificationType.ADMIN: Role.ADMIN,
    NotificationType.DELIVERY: Role.DELIVERY_PARTNER,
}


class NotificationInbox:
    """Stores and scopes in-app notifications."""

    def __init__(self, store: DataStore):
        self.store = store

    def _publish(self, type: NotificationType, title: str, message: str, order: Order, user_id=None) -> Notification:
        notification = self.store.notifications.add(
            type=type,
            title=title,
            message=message,
            user_id=user_id,
            order_id=order.id,
        )
        logger.debug(f"🔔 Notification #{notification.id} ({type.value}): {title}")
        return notification

    def order_placed(self, order: Order) -> List[Notification]:
        title, message = STATUS_MESSAGES[OrderStatus.PENDING]
        return [
            self._publish(NotificationType.ORDER, title, f"{message} (#{order.id})", order, order.user_id),
            self._publish(
                NotificationType.ADMIN,
                "New Order",
                f"Order #{order.id} placed for {order.total_amount:.2f}",
                order,
            ),
        ]

    def status_changed(self, order: Order) -> List[Notification]:
        title, message = STATUS_MESSAGES[order.status]
        published = [
            self._publish(NotificationType.ORDER, title, f"{message} (#{order.id})", order, order.user_id),
        ]
        if order.status == OrderStatus.CONFIRMED:
            published.append(self._publish(
                NotificationType.DELIVERY,
                "Delivery Request",
                f"Order #{order.id} is ready to be picked up",
                order,
            ))
        return published

    def payment_completed(self, order: Order) -> List[Notification]:
        notifications = [
            self._publish(
                NotificationType.PAYMENT,
                "Payment Successful",
                f"Payment for order #{order.id} has been processed successfully",
                order,
                order.user_id,
            ),
        ]
        return notifications + self.status_changed(order)

    def list_for(self, session: Session) -> List[Notification]:
        return [
            n for n in self.store.notifications.list()
            if n.user_id == session.user_id
            or BROADCAST_AUDIENCE.get(n.type) == session.role
        ]
