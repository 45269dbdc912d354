"""HTTP routers, one per API area."""

from tiffin.routes import admin, auth, delivery, menu, notifications, orders, payments

__all__ = ["admin", "auth", "delivery", "menu", "notifications", "orders", "payments"]
