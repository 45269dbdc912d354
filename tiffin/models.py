"""
Domain Records

Plain dataclasses held by the in-memory store. Entities are mutated only
by the services that own them, under the store's per-entity locks.

Version: 1.0.0
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


class Role(str, enum.Enum):
    """Roles gating endpoint access."""
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"
    DELIVERY_PARTNER = "DELIVERY_PARTNER"


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class NotificationType(str, enum.Enum):
    """
    Notification audience/type.

    ORDER and PAYMENT notifications are addressed to one user; ADMIN and
    DELIVERY notifications are broadcast to every user holding that role.
    """
    ORDER = "ORDER"
    PAYMENT = "PAYMENT"
    ADMIN = "ADMIN"
    DELIVERY = "DELIVERY"


# =============================================================================
# ACCOUNTS
# =============================================================================

@dataclass
class User:
    """
    A customer, admin or delivery-partner account.

    Accounts created through OTP verification have no email and no
    password digest.
    """
    id: int
    name: str
    phone: str
    role: Role = Role.CUSTOMER
    email: Optional[str] = None
    password_hash: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)

    def __repr__(self):
        return f"<User #{self.id} - {self.name} - {self.role.value}>"


@dataclass
class OtpChallenge:
    """One-time code issued to a phone number."""
    phone: str
    code: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class Session:
    """Identity and role decoded from a validated token. Never stored."""
    user_id: int
    role: Role
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at


# =============================================================================
# CATALOG
# =============================================================================

@dataclass
class Dish:
    id: int
    name: str
    price: float
    category: str
    description: str = ""
    is_vegetarian: bool = False
    is_available: bool = True
    image_url: Optional[str] = None
    preparation_time: Optional[int] = None
    spice_level: Optional[str] = None


# =============================================================================
# ORDERS
# =============================================================================

@dataclass
class OrderItem:
    """Line item; ``price`` is the unit price snapshot supplied by the caller."""
    price: float
    quantity: int
    dish_id: Optional[int] = None
    name: Optional[str] = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass
class Order:
    """
    A customer order.

    Tracks the lifecycle from placement to delivery. ``delivery_partner_id``
    is assigned when a delivery partner moves the order out for delivery.
    """
    id: int
    user_id: int
    items: List[OrderItem]
    total_amount: float
    delivery_address: Optional[str] = None
    payment_method: Optional[str] = None
    special_instructions: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=datetime.now)
    delivered_at: Optional[datetime] = None
    delivery_partner_id: Optional[int] = None

    def __repr__(self):
        return f"<Order #{self.id} - user {self.user_id} - {self.status.value}>"


# =============================================================================
# NOTIFICATIONS
# =============================================================================

@dataclass
class Notification:
    id: int
    type: NotificationType
    title: str
    message: str
    user_id: Optional[int] = None
    order_id: Optional[int] = None
    read: bool = False
    created_at: datetime = field(default_factory=datetime.now)
