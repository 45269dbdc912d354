"""
Pydantic Schemas for Request/Response Validation

All JSON keys are camelCase on the wire (``deliveryAddress``,
``totalAmount``, ...) while Python code uses snake_case field names.

Version: 1.0.0
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tiffin.models import Dish, Notification, Order, OrderItem, OrderStatus, User


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, construction by field name allowed."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# AUTH REQUEST SCHEMAS
# =============================================================================

class SendOtpRequest(CamelModel):
    phone: str = Field(..., min_length=1, max_length=20, examples=["+1234567890"])


class VerifyOtpRequest(CamelModel):
    phone: str = Field(..., min_length=1, max_length=20, examples=["+1234567890"])
    otp: str = Field(..., min_length=1, max_length=10, examples=["123456"])


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, examples=["user@test.com"])
    password: str = Field(..., min_length=1)


class SignupRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Jane Doe"])
    email: str = Field(..., examples=["jane@example.com"])
    phone: str = Field(..., min_length=1, max_length=20, examples=["+15550001111"])
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r'^[\w\.\+-]+@[\w\.-]+\.\w+$', v):
            raise ValueError("Invalid email format")
        return v


# =============================================================================
# AUTH RESPONSE SCHEMAS
# =============================================================================

class UserOut(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: str

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(id=user.id, name=user.name, email=user.email, phone=user.phone, role=user.role.value)


class PartnerOut(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class AuthResponse(CamelModel):
    success: bool = True
    token: str
    user: UserOut


class PartnerAuthResponse(CamelModel):
    success: bool = True
    token: str
    partner: PartnerOut


class SendOtpResponse(CamelModel):
    success: bool = True
    message: str
    otp: Optional[str] = None


class VerifyOtpResponse(CamelModel):
    success: bool = True
    token: str
    phone: str
    name: str
    is_new_user: bool


# =============================================================================
# MENU
# =============================================================================

class DishOut(CamelModel):
    id: int
    name: str
    description: str
    price: float
    category: str
    is_vegetarian: bool
    is_available: bool
    image_url: Optional[str] = None
    preparation_time: Optional[int] = None
    spice_level: Optional[str] = None

    @classmethod
    def from_dish(cls, dish: Dish) -> "DishOut":
        return cls(
            id=dish.id,
            name=dish.name,
            description=dish.description,
            price=dish.price,
            category=dish.category,
            is_vegetarian=dish.is_vegetarian,
            is_available=dish.is_available,
            image_url=dish.image_url,
            preparation_time=dish.preparation_time,
            spice_level=dish.spice_level,
        )


# =============================================================================
# ORDERS
# =============================================================================

class OrderItemIn(CamelModel):
    """Single line item; the unit price is taken as supplied."""
    dish_id: Optional[int] = Field(None, examples=[1])
    name: Optional[str] = Field(None, max_length=100, examples=["Chicken Biryani"])
    price: float = Field(..., ge=0, examples=[15.99])
    quantity: int = Field(..., ge=1, le=99, examples=[2])

    def to_item(self) -> OrderItem:
        return OrderItem(price=self.price, quantity=self.quantity, dish_id=self.dish_id, name=self.name)


class OrderCreate(CamelModel):
    items: List[OrderItemIn] = Field(..., min_length=1)
    delivery_address: Optional[str] = Field(None, max_length=255, examples=["456 Customer Ave"])
    payment_method: Optional[str] = Field(None, max_length=50, examples=["CARD", "CASH"])
    special_instructions: Optional[str] = Field(None, max_length=500)


class StatusUpdate(CamelModel):
    status: OrderStatus = Field(..., examples=["CONFIRMED"])


class OrderItemOut(CamelModel):
    dish_id: Optional[int] = None
    name: Optional[str] = None
    price: float
    quantity: int


class OrderOut(CamelModel):
    id: int
    user_id: int
    items: List[OrderItemOut]
    total_amount: float
    delivery_address: Optional[str] = None
    payment_method: Optional[str] = None
    special_instructions: Optional[str] = None
    status: OrderStatus
    payment_status: str
    order_time: datetime
    delivery_time: Optional[datetime] = None
    delivery_partner_id: Optional[int] = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderOut":
        return cls(
            id=order.id,
            user_id=order.user_id,
            items=[
                OrderItemOut(dish_id=i.dish_id, name=i.name, price=i.price, quantity=i.quantity)
                for i in order.items
            ],
            total_amount=order.total_amount,
            delivery_address=order.delivery_address,
            payment_method=order.payment_method,
            special_instructions=order.special_instructions,
            status=order.status,
            payment_status=order.payment_status.value,
            order_time=order.created_at,
            delivery_time=order.delivered_at,
            delivery_partner_id=order.delivery_partner_id,
        )


class OrderEnvelope(CamelModel):
    success: bool = True
    order: OrderOut


# =============================================================================
# ADMIN
# =============================================================================

class AdminStats(CamelModel):
    total_users: int
    total_orders: int
    total_revenue: float
    total_dishes: int
    active_delivery_partners: int
    orders_today: int


class SanitizedUser(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: str
    is_active: bool


class UserStatus(CamelModel):
    id: int
    is_active: bool


class ToggleStatusResponse(CamelModel):
    success: bool = True
    user: UserStatus


# =============================================================================
# DELIVERY
# =============================================================================

class DeliveryStats(CamelModel):
    total_deliveries: int
    total_earnings: float
    today_deliveries: int
    today_earnings: float
    pending_orders: int
    rating: float


class DeliveryProfile(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    vehicle_number: str
    license_number: str
    rating: float
    total_deliveries: int


# =============================================================================
# PAYMENTS
# =============================================================================

class PaymentCreateRequest(CamelModel):
    amount: float = Field(..., gt=0, examples=[25.5])
    currency: Optional[str] = Field(None, max_length=3, examples=["INR"])
    payment_method: Optional[str] = Field(None, examples=["RAZORPAY"])


class PaymentVerifyRequest(CamelModel):
    """Fields are optional so that incomplete confirmations fail verification, not parsing."""
    payment_id: Optional[str] = None
    order_id: Optional[Union[str, int]] = None
    signature: Optional[str] = None


class MessageResponse(CamelModel):
    success: bool
    message: str


# =============================================================================
# NOTIFICATIONS
# =============================================================================

class NotificationOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    type: str
    title: str
    message: str
    order_id: Optional[int] = None
    read: bool
    created_at: datetime

    @classmethod
    def from_notification(cls, n: Notification) -> "NotificationOut":
        return cls(
            id=n.id,
            user_id=n.user_id,
            type=n.type.value,
            title=n.title,
            message=n.message,
            order_id=n.order_id,
            read=n.read,
            created_at=n.created_at,
        )


# =============================================================================
# SYSTEM
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    uptime: float
    environment: str
    services: Dict[str, Any]
