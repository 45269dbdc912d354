"""
Payment Processor

Applies gateway results to orders. A successful verification marks the
referenced order paid and confirmed in one locked update; a failed one
leaves the order untouched.
"""

import logging
import re
from typing import Optional, Union

from tiffin.core.config import get_settings
from tiffin.core.errors import OrderNotFound, PaymentVerificationFailed
from tiffin.models import Order
from tiffin.services.orders import OrderLifecycleManager
from tiffin.services.payment.base import BasePaymentGateway, PaymentOrder

logger = logging.getLogger(__name__)

ORDER_REFERENCE = re.compile(r"^(?:order_)?(\d+)$")


def parse_order_reference(reference: Union[str, int, None]) -> Optional[int]:
    """Extract the order id from ``5``, ``"5"`` or ``"order_5"``."""
    if reference is None:
        return None
    match = ORDER_REFERENCE.match(str(reference).strip())
    return int(match.group(1)) if match else None


class PaymentProcessor:

    def __init__(self, gateway: BasePaymentGateway, orders: OrderLifecycleManager):
        self.gateway = gateway
        self.orders = orders

    async def create_payment_order(
        self,
        amount: float,
        currency: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> PaymentOrder:
        return await self.gateway.create_payment_order(
            amount=amount,
            currency=currency or get_settings().default_currency,
            payment_method=payment_method,
        )

    async def verify_payment(
        self,
        payment_id: Optional[str],
        order_id: Union[str, int, None],
        signature: Optional[str],
    ) -> Optional[Order]:
        """
        Verify a payment and confirm the order it references.

        Returns:
            Order: The confirmed order, or None when the reference matches
            no order (the verification itself still succeeds)

        Raises:
            PaymentVerificationFailed: The gateway rejected the confirmation
        """
        reference = "" if order_id is None else str(order_id)
        valid = await self.gateway.verify_payment(payment_id or "", reference, signature or "")
        if not valid:
            logger.warning(f"❌ Payment verification failed for order: {reference}")
            raise PaymentVerificationFailed()

        order_pk = parse_order_reference(order_id)
        try:
            order = self.orders.mark_paid(order_pk) if order_pk is not None else None
        except OrderNotFound:
            order = None

        if order is None:
            logger.warning(f"Payment verified for unknown order reference: {reference}")
        else:
            logger.info(f"✅ Payment verified for order: #{order.id}")
        return order
