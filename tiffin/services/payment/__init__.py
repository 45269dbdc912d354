"""
Payment Gateway Factory

Provides a single entry point for obtaining a payment gateway instance.
The rest of the application stays agnostic about which implementation is
in use.

Usage:
    from tiffin.services.payment import get_payment_gateway

    gateway = get_payment_gateway()
    payment_order = await gateway.create_payment_order(25.0, "INR")

Environment Switching:
    Only the mock gateway exists; staging and production log a warning and
    fall back to it.

Version: 1.0.0
"""

import logging
from functools import lru_cache

from tiffin.core.config import get_settings
from tiffin.services.payment.base import BasePaymentGateway, PaymentOrder
from tiffin.services.payment.mock import MockPaymentGateway
from tiffin.services.payment.processor import PaymentProcessor, parse_order_reference

logger = logging.getLogger(__name__)


@lru_cache()
def get_payment_gateway() -> BasePaymentGateway:
    """
    Get the configured payment gateway instance.

    The instance is cached (singleton pattern) so every request shares it.

    Returns:
        BasePaymentGateway: Configured payment gateway
    """
    settings = get_settings()

    if settings.use_real_services:
        logger.warning(
            f"Payment Gateway: no real gateway configured "
            f"({settings.env_mode.value} mode), using MockPaymentGateway"
        )
    else:
        logger.info("Payment Gateway: Using MockPaymentGateway (development mode)")
    return MockPaymentGateway()


def reset_payment_gateway() -> None:
    """
    Clear the cached payment gateway instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_payment_gateway.cache_clear()
    logger.debug("Payment gateway cache cleared")


__all__ = [
    "get_payment_gateway",
    "reset_payment_gateway",
    "BasePaymentGateway",
    "MockPaymentGateway",
    "PaymentOrder",
    "PaymentProcessor",
    "parse_order_reference",
]
