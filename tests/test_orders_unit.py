"""
Unit tests for the order lifecycle manager and the role gate.
"""
import threading

import pytest

from tiffin.core.errors import (
    AccessTokenRequired,
    InsufficientPermissions,
    InvalidTransition,
    NotAuthorized,
    OrderNotFound,
)
from tiffin.models import OrderItem, OrderStatus, PaymentStatus, Role, Session
from tiffin.services.authorization import authorize, has_role
from tiffin.services.orders import (
    LIFECYCLE,
    OrderLifecycleManager,
    calculate_total,
    is_legal_transition,
)

CUSTOMER = Session(user_id=1, role=Role.CUSTOMER, name="Test User")
OTHER_CUSTOMER = Session(user_id=99, role=Role.CUSTOMER, name="Someone Else")
ADMIN = Session(user_id=2, role=Role.ADMIN, name="Admin User")
PARTNER = Session(user_id=3, role=Role.DELIVERY_PARTNER, name="John Delivery")
OTHER_PARTNER = Session(user_id=4, role=Role.DELIVERY_PARTNER, name="Ravi Delivery")


@pytest.fixture
def manager(store):
    return OrderLifecycleManager(store, strict_transitions=False)


@pytest.fixture
def order(manager):
    return manager.create_order(
        customer_id=1,
        items=[OrderItem(price=10, quantity=2, dish_id=1, name="Chicken Biryani")],
        delivery_address="456 Customer Ave",
        payment_method="CARD",
    )


# =============================================================================
# ROLE GATE
# =============================================================================

def test_authorize_passes_allowed_role():
    assert authorize(ADMIN, [Role.ADMIN]) is ADMIN
    assert has_role(PARTNER, [Role.ADMIN, Role.DELIVERY_PARTNER])


def test_authorize_without_session():
    with pytest.raises(AccessTokenRequired):
        authorize(None, [Role.ADMIN])


def test_authorize_wrong_role():
    with pytest.raises(InsufficientPermissions):
        authorize(CUSTOMER, [Role.ADMIN])
    assert not has_role(CUSTOMER, [])


# =============================================================================
# CREATION & TOTALS
# =============================================================================

def test_calculate_total():
    items = [OrderItem(price=10, quantity=2), OrderItem(price=2.5, quantity=4)]
    assert calculate_total(items) == 30


def test_new_order_defaults(order):
    assert order.id == 1
    assert order.user_id == 1
    assert order.total_amount == 20
    assert order.status == OrderStatus.PENDING
    assert order.payment_status == PaymentStatus.PENDING
    assert order.delivery_partner_id is None
    assert order.delivered_at is None


def test_order_ids_are_sequential(manager, order):
    second = manager.create_order(customer_id=1, items=[OrderItem(price=1, quantity=1)])
    assert second.id == order.id + 1


def test_unknown_order(manager):
    with pytest.raises(OrderNotFound):
        manager.get_order(999)
    with pytest.raises(OrderNotFound):
        manager.transition_status(ADMIN, 999, OrderStatus.CONFIRMED)


# =============================================================================
# VISIBILITY
# =============================================================================

def test_visibility_by_role(manager, order):
    other = manager.create_order(customer_id=99, items=[OrderItem(price=5, quantity=1)])
    manager.transition_status(ADMIN, other.id, OrderStatus.CONFIRMED)

    assert [o.id for o in manager.list_orders(ADMIN)] == [order.id, other.id]
    assert [o.id for o in manager.list_orders(CUSTOMER)] == [order.id]
    assert [o.id for o in manager.list_orders(OTHER_CUSTOMER)] == [other.id]
    # PENDING orders are hidden from partners until confirmed
    assert [o.id for o in manager.list_orders(PARTNER)] == [other.id]


def test_partner_keeps_seeing_assigned_orders(manager, order):
    manager.transition_status(ADMIN, order.id, OrderStatus.CONFIRMED)
    manager.transition_status(PARTNER, order.id, OrderStatus.OUT_FOR_DELIVERY)
    manager.transition_status(PARTNER, order.id, OrderStatus.DELIVERED)

    assert [o.id for o in manager.list_orders(PARTNER)] == [order.id]
    assert manager.list_orders(OTHER_PARTNER) == []


# =============================================================================
# TRANSITIONS
# =============================================================================

def test_customer_cannot_touch_foreign_order(manager, order):
    with pytest.raises(NotAuthorized):
        manager.transition_status(OTHER_CUSTOMER, order.id, OrderStatus.CANCELLED)

    assert manager.get_order(order.id).status == OrderStatus.PENDING


def test_customer_may_change_own_order(manager, order):
    updated = manager.transition_status(CUSTOMER, order.id, OrderStatus.CANCELLED)
    assert updated.status == OrderStatus.CANCELLED


def test_partner_claims_order_when_going_out_for_delivery(manager, order):
    manager.transition_status(ADMIN, order.id, OrderStatus.CONFIRMED)
    updated = manager.transition_status(PARTNER, order.id, OrderStatus.OUT_FOR_DELIVERY)

    assert updated.status == OrderStatus.OUT_FOR_DELIVERY
    assert updated.delivery_partner_id == PARTNER.user_id


def test_admin_dispatch_does_not_assign_partner(manager, order):
    updated = manager.transition_status(ADMIN, order.id, OrderStatus.OUT_FOR_DELIVERY)
    assert updated.delivery_partner_id is None


def test_second_partner_takes_over(manager, order):
    manager.transition_status(PARTNER, order.id, OrderStatus.OUT_FOR_DELIVERY)
    updated = manager.transition_status(OTHER_PARTNER, order.id, OrderStatus.OUT_FOR_DELIVERY)

    assert updated.delivery_partner_id == OTHER_PARTNER.user_id


def test_permissive_mode_allows_any_jump(manager, order):
    manager.transition_status(ADMIN, order.id, OrderStatus.DELIVERED)
    reopened = manager.transition_status(ADMIN, order.id, OrderStatus.PENDING)

    assert reopened.status == OrderStatus.PENDING


def test_strict_mode_enforces_lifecycle(store, order):
    strict = OrderLifecycleManager(store, strict_transitions=True)

    with pytest.raises(InvalidTransition):
        strict.transition_status(ADMIN, order.id, OrderStatus.DELIVERED)
    assert strict.get_order(order.id).status == OrderStatus.PENDING

    for status in (OrderStatus.CONFIRMED, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED):
        strict.transition_status(ADMIN, order.id, status)

    with pytest.raises(InvalidTransition):
        strict.transition_status(ADMIN, order.id, OrderStatus.CANCELLED)


def test_lifecycle_table():
    assert is_legal_transition(OrderStatus.PENDING, OrderStatus.CONFIRMED)
    assert is_legal_transition(OrderStatus.CONFIRMED, OrderStatus.CANCELLED)
    assert not is_legal_transition(OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED)
    for status in OrderStatus:
        assert (LIFECYCLE[status] == set()) == status.is_terminal


def test_mark_paid(manager, order):
    paid = manager.mark_paid(order.id)

    assert paid.payment_status == PaymentStatus.COMPLETED
    assert paid.status == OrderStatus.CONFIRMED


def test_concurrent_dispatch_and_payment_leave_consistent_order(manager, order, store):
    """Partners claiming and a payment landing at once never tear the record."""
    partners = [
        Session(user_id=10 + n, role=Role.DELIVERY_PARTNER, name=f"Rider {n}")
        for n in range(8)
    ]
    threads_count = len(partners) + 8
    barrier = threading.Barrier(threads_count)
    errors = []

    def dispatch(session):
        barrier.wait()
        try:
            manager.transition_status(session, order.id, OrderStatus.OUT_FOR_DELIVERY)
        except Exception as exc:
            errors.append(exc)

    def pay():
        barrier.wait()
        try:
            manager.mark_paid(order.id)
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=dispatch, args=(s,)) for s in partners]
    threads += [threading.Thread(target=pay) for _ in range(threads_count - len(partners))]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    final = store.orders.get(order.id)
    assert errors == []
    assert final.payment_status == PaymentStatus.COMPLETED
    assert final.status in (OrderStatus.CONFIRMED, OrderStatus.OUT_FOR_DELIVERY)
    assert final.delivery_partner_id in {s.user_id for s in partners}
    assert final.total_amount == 20
    assert len(store.orders._row_locks) == 0
