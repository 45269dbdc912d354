"""
Payment Gateway Abstract Base Class

Defines the interface contract for payment gateway implementations.
The checkout flow is two-step:
    1. create_payment_order: the client receives a gateway order to pay
    2. verify_payment: the client reports the gateway's payment id and
       signature, which the gateway checks before the order is confirmed

Design Pattern: Strategy Pattern
    - Allows runtime switching between payment providers
    - Facilitates testing with mock implementations

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class PaymentOrder:
    """
    Gateway-side order the client pays against.

    Attributes:
        id: Gateway order id (format: order_xxx)
        amount: Amount in minor currency units (e.g. paise)
        currency: Currency code (e.g. "INR")
        status: Gateway order status ("created")
        payment_method: Requested payment method, if any
    """
    id: str
    amount: int
    currency: str
    status: str = "created"
    payment_method: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "id": self.id,
            "amount": self.amount,
            "currency": self.currency,
            "status": self.status,
        }
        if self.payment_method is not None:
            data["paymentMethod"] = self.payment_method
        return data


class BasePaymentGateway(ABC):
    """
    Abstract base class for payment gateways.

    Example:
        >>> gateway = get_payment_gateway()
        >>> order = await gateway.create_payment_order(amount=25.0, currency="INR")
        >>> ok = await gateway.verify_payment("pay_1", order.id, "sig")
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the payment provider.

        Returns:
            str: Provider name (e.g., "mock")
        """
        pass

    @abstractmethod
    async def create_payment_order(
        self,
        amount: float,
        currency: str,
        payment_method: Optional[str] = None,
    ) -> PaymentOrder:
        """
        Create a gateway order for the client to pay.

        Args:
            amount: Amount in major units (e.g. 25.50)
            currency: Three-letter currency code
            payment_method: Requested payment method

        Returns:
            PaymentOrder: Amount converted to minor units
        """
        pass

    @abstractmethod
    async def verify_payment(
        self,
        payment_id: str,
        order_id: str,
        signature: str,
    ) -> bool:
        """
        Check the payment confirmation reported by the client.

        Args:
            payment_id: Gateway payment id
            order_id: Order reference the payment was made for
            signature: Gateway signature over the payment

        Returns:
            bool: True if the payment is genuine
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the payment gateway.

        Returns:
            bool: True if the gateway is reachable and operational
        """
        pass
