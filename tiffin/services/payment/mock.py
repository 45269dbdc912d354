"""
Mock Payment Gateway Implementation

Simulates a Razorpay-like checkout without making real API calls.

Behavior:
    - Generates gateway-like order ids (order_xxx)
    - Converts amounts to minor units (x100)
    - Accepts any verification whose three fields are non-empty;
      no cryptographic signature check is performed

Version: 1.0.0
"""

import uuid
import logging
from typing import Optional

from tiffin.services.payment.base import BasePaymentGateway, PaymentOrder

logger = logging.getLogger(__name__)


class MockPaymentGateway(BasePaymentGateway):
    """
    Mock implementation of the payment gateway.

    Example:
        >>> gateway = MockPaymentGateway()
        >>> order = await gateway.create_payment_order(25.5, "INR")
        >>> order.amount
        2550
    """

    def __init__(self):
        logger.info("MockPaymentGateway initialized")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    def _generate_order_id(self) -> str:
        """Generate a gateway-like order ID."""
        return f"order_{uuid.uuid4().hex[:14]}"

    async def create_payment_order(
        self,
        amount: float,
        currency: str,
        payment_method: Optional[str] = None,
    ) -> PaymentOrder:
        """Simulate creating a gateway order."""
        payment_order = PaymentOrder(
            id=self._generate_order_id(),
            amount=int(round(amount * 100)),
            currency=currency,
            payment_method=payment_method,
        )
        logger.info(f"💳 Mock: Payment order created: {payment_order.id} for {amount:.2f} {currency}")
        return payment_order

    async def verify_payment(
        self,
        payment_id: str,
        order_id: str,
        signature: str,
    ) -> bool:
        """
        Simulate payment verification.

        In mock mode, any confirmation with all fields present is accepted.
        """
        return bool(payment_id and order_id and signature)

    async def health_check(self) -> bool:
        """
        Mock health check always returns True.
        """
        logger.debug("Mock: Health check passed")
        return True
