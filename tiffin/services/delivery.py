"""
Delivery Assignment View

Read-only projections over orders for delivery partners. Nothing here
mutates state; assignment happens in the Order Lifecycle Manager.
"""

import logging
import random
from datetime import date
from typing import Any, Dict, List, Optional

from tiffin.core.config import get_settings
from tiffin.core.errors import UserNotFound
from tiffin.models import Order, OrderStatus
from tiffin.store import DataStore

logger = logging.getLogger(__name__)

ASSIGNED_VISIBLE = (OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED)

# Vehicle and license records are not tracked yet
MOCK_VEHICLE_NUMBER = "MH01AB1234"
MOCK_LICENSE_NUMBER = "DL123456789"


def mock_rating() -> float:
    return round(random.uniform(4.5, 5.0), 1)


class DeliveryAssignmentView:

    def __init__(self, store: DataStore, delivery_rate: Optional[float] = None):
        self.store = store
        self.delivery_rate = get_settings().delivery_rate if delivery_rate is None else delivery_rate

    def claimable_orders(self) -> List[Order]:
        """CONFIRMED orders waiting for a partner."""
        return [o for o in self.store.orders.list() if o.status == OrderStatus.CONFIRMED]

    def available_for_partner(self, partner_id: int) -> List[Order]:
        """Claimable orders plus the partner's own out-for-delivery and delivered orders."""
        return [
            o for o in self.store.orders.list()
            if o.status == OrderStatus.CONFIRMED
            or (o.delivery_partner_id == partner_id and o.status in ASSIGNED_VISIBLE)
        ]

    def _assigned_to(self, partner_id: int) -> List[Order]:
        return [o for o in self.store.orders.list() if o.delivery_partner_id == partner_id]

    def partner_stats(self, partner_id: int, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Delivery counts and earnings for a partner.

        "Today" compares each order's creation date with ``today``
        (the server's local calendar day by default).
        """
        today = today or date.today()
        assigned = self._assigned_to(partner_id)
        delivered = [o for o in assigned if o.status == OrderStatus.DELIVERED]
        delivered_today = [o for o in delivered if o.created_at.date() == today]
        logger.debug(f"📊 Partner #{partner_id}: {len(delivered)} delivered, {len(delivered_today)} today")

        return {
            "totalDeliveries": len(delivered),
            "totalEarnings": len(delivered) * self.delivery_rate,
            "todayDeliveries": len(delivered_today),
            "todayEarnings": len(delivered_today) * self.delivery_rate,
            "pendingOrders": sum(1 for o in assigned if o.status == OrderStatus.OUT_FOR_DELIVERY),
            "rating": mock_rating(),
        }

    def partner_profile(self, partner_id: int) -> Dict[str, Any]:
        user = self.store.users.get(partner_id)
        if user is None:
            raise UserNotFound()

        delivered = sum(
            1 for o in self._assigned_to(partner_id) if o.status == OrderStatus.DELIVERED
        )
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "phone": user.phone,
            "isActive": user.is_active,
            "vehicleNumber": MOCK_VEHICLE_NUMBER,
            "licenseNumber": MOCK_LICENSE_NUMBER,
            "rating": mock_rating(),
            "totalDeliveries": delivered,
        }
