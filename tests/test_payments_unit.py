"""
Unit tests for the mock payment gateway and the payment processor.
"""
import asyncio

import pytest

from tiffin.core.config import get_settings
from tiffin.core.errors import PaymentVerificationFailed
from tiffin.models import OrderItem, OrderStatus, PaymentStatus
from tiffin.services.orders import OrderLifecycleManager
from tiffin.services.payment import MockPaymentGateway, PaymentProcessor, parse_order_reference


@pytest.fixture
def gateway():
    return MockPaymentGateway()


@pytest.fixture
def manager(store):
    return OrderLifecycleManager(store, strict_transitions=False)


@pytest.fixture
def processor(gateway, manager):
    return PaymentProcessor(gateway, manager)


@pytest.fixture
def order(manager):
    return manager.create_order(customer_id=1, items=[OrderItem(price=12.5, quantity=2)])


def test_payment_order_in_minor_units(gateway):
    payment_order = asyncio.run(gateway.create_payment_order(25.5, "INR"))

    assert payment_order.id.startswith("order_")
    assert payment_order.amount == 2550
    assert payment_order.currency == "INR"
    assert payment_order.status == "created"
    assert "paymentMethod" not in payment_order.to_dict()


def test_payment_order_ids_are_unique(gateway):
    first = asyncio.run(gateway.create_payment_order(1.0, "INR"))
    second = asyncio.run(gateway.create_payment_order(1.0, "INR"))
    assert first.id != second.id


def test_processor_defaults_currency(processor):
    payment_order = asyncio.run(processor.create_payment_order(10.0, payment_method="UPI"))

    assert payment_order.currency == get_settings().default_currency
    assert payment_order.to_dict()["paymentMethod"] == "UPI"


@pytest.mark.parametrize("payment_id,order_ref,signature,expected", [
    ("pay_1", "order_1", "sig", True),
    ("", "order_1", "sig", False),
    ("pay_1", "", "sig", False),
    ("pay_1", "order_1", "", False),
])
def test_mock_verification_requires_all_fields(gateway, payment_id, order_ref, signature, expected):
    assert asyncio.run(gateway.verify_payment(payment_id, order_ref, signature)) is expected


@pytest.mark.parametrize("reference,expected", [
    (5, 5),
    ("5", 5),
    ("order_5", 5),
    (" order_12 ", 12),
    ("order_abc123", None),
    ("pay_5", None),
    (None, None),
])
def test_parse_order_reference(reference, expected):
    assert parse_order_reference(reference) == expected


def test_verified_payment_confirms_order(processor, order):
    confirmed = asyncio.run(processor.verify_payment("pay_1", f"order_{order.id}", "sig"))

    assert confirmed is order
    assert order.payment_status == PaymentStatus.COMPLETED
    assert order.status == OrderStatus.CONFIRMED


def test_failed_verification_leaves_order_untouched(processor, order):
    with pytest.raises(PaymentVerificationFailed):
        asyncio.run(processor.verify_payment("pay_1", order.id, ""))

    assert order.payment_status == PaymentStatus.PENDING
    assert order.status == OrderStatus.PENDING


def test_verification_for_unknown_order_still_succeeds(processor):
    assert asyncio.run(processor.verify_payment("pay_1", "order_999", "sig")) is None
