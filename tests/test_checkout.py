from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from services.cart_service.repository import CartRepository
from services.order_service.checkout import CheckoutOrchestrator, CheckoutState, compute_total


def test_compute_total_sums_price_times_quantity():
    lines = [(Decimal("10"), 2), (Decimal("5"), 3)]
    assert compute_total(lines) == Decimal("35.00")


def test_compute_total_has_no_float_drift():
    lines = [(Decimal("0.10"), 1)] * 3
    assert compute_total(lines) == Decimal("0.30")


def test_compute_total_of_nothing_is_zero():
    assert compute_total([]) == Decimal("0.00")


@pytest.fixture
def transitions(monkeypatch):
    """Records every state the orchestrator moves into."""
    seen = []
    original = CheckoutOrchestrator._transition

    def record(ctx, state, log, **fields):
        seen.append(state)
        return original(ctx, state, log, **fields)

    monkeypatch.setattr(CheckoutOrchestrator, "_transition", staticmethod(record))
    return seen


def test_successful_checkout_walks_every_state(client, customer_headers, make_product, transitions):
    client.post("/cart", json={"productId": make_product(), "quantity": 1}, headers=customer_headers)

    assert client.post("/orders", headers=customer_headers).status_code == 200
    assert transitions == [
        CheckoutState.VALIDATING,
        CheckoutState.PRICING,
        CheckoutState.PERSISTING,
        CheckoutState.CLEARED,
        CheckoutState.COMPLETED,
    ]


def test_empty_cart_is_rejected_while_validating(client, customer_headers, transitions):
    assert client.post("/orders", headers=customer_headers).status_code == 400
    assert transitions == [CheckoutState.VALIDATING, CheckoutState.REJECTED]


def test_oversized_total_is_rejected_while_pricing(client, customer_headers, make_product, transitions):
    product_id = make_product(price=9999999999.99)
    client.post("/cart", json={"productId": product_id, "quantity": 2}, headers=customer_headers)

    assert client.post("/orders", headers=customer_headers).status_code == 400
    assert transitions == [CheckoutState.VALIDATING, CheckoutState.PRICING, CheckoutState.REJECTED]


def test_store_failure_never_reaches_completed(client, customer_headers, make_product, transitions, monkeypatch):
    client.post("/cart", json={"productId": make_product(), "quantity": 1}, headers=customer_headers)

    async def broken_clear(db, cart_id):
        raise OperationalError("DELETE FROM cart_items", {}, Exception("disk I/O error"))

    monkeypatch.setattr(CartRepository, "clear_cart", staticmethod(broken_clear))

    assert client.post("/orders", headers=customer_headers).status_code == 500
    assert transitions[-1] == CheckoutState.CLEARED
    assert CheckoutState.COMPLETED not in transitions
