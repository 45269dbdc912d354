"""
Admin Aggregation

Dashboard statistics recomputed on every call, plus account listing and
the active-flag toggle.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from tiffin.core.errors import UserNotFound
from tiffin.models import Role, User
from tiffin.store import DataStore

logger = logging.getLogger(__name__)


def sanitize_user(user: User) -> Dict[str, Any]:
    """Public view of an account (no password digest)."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role.value,
        "isActive": user.is_active,
    }


class AdminService:

    def __init__(self, store: DataStore):
        self.store = store

    def stats(self, today: Optional[date] = None) -> Dict[str, Any]:
        """Aggregate counts over users, orders and dishes."""
        today = today or date.today()
        users = self.store.users.list()
        orders = self.store.orders.list()

        return {
            "totalUsers": sum(1 for u in users if u.role == Role.CUSTOMER),
            "totalOrders": len(orders),
            "totalRevenue": sum(o.total_amount for o in orders),
            "totalDishes": len(self.store.dishes.list()),
            "activeDeliveryPartners": sum(
                1 for u in users if u.role == Role.DELIVERY_PARTNER and u.is_active
            ),
            "ordersToday": sum(1 for o in orders if o.created_at.date() == today),
        }

    def list_users(self) -> List[Dict[str, Any]]:
        return [sanitize_user(u) for u in self.store.users.list()]

    def toggle_user_status(self, user_id: int) -> User:
        """
        Flip a user's active flag.

        Raises:
            UserNotFound: Unknown user id
        """
        user = self.store.users.toggle_active(user_id)
        if user is None:
            raise UserNotFound()

        state = "active" if user.is_active else "inactive"
        logger.info(f"👤 User {user.name} status toggled to {state}")
        return user
