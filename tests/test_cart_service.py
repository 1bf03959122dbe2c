"""Tests for the session-aware cart use case."""
from __future__ import annotations

from decimal import Decimal

import pytest
from returns.result import Failure, Success

from conftest import RecordingPublisher
from pizza_cart.adapters.outbound.in_memory_carts import InMemoryCartRepository
from pizza_cart.core.domain.model.cart import CartStatus, Money, PizzaId, SessionId
from pizza_cart.core.domain.model.errors import (
    DuplicateItem,
    ItemNotFound,
    ValidationError,
)
from pizza_cart.core.domain.service.cart_service import CartDeps, CartService
from pizza_cart.core.domain.service.cart_store import DuplicatePolicy
from pizza_cart.core.ports.inbound.cart import (
    AddItemCommand,
    ChangeQuantityCommand,
    ClearCartCommand,
    GetCartQuery,
    QuantityQuery,
    RemoveItemCommand,
)


def _add(session: str, pizza_id: int, price: str = "10.00", name: str = "Margherita"):
    return AddItemCommand(
        session_id=session, pizza_id=pizza_id, name=name, unit_price=Decimal(price)
    )


def test_unknown_session_reads_as_empty(service):
    view = service.get_cart(GetCartQuery("s-1")).unwrap()

    assert view.status is CartStatus.EMPTY
    assert view.total_items == 0
    assert view.total_value == Money.zero("EUR")
    assert view.lines == ()


def test_add_then_read_back(service):
    added = service.add_item(_add("s-1", 1, "12.00"))

    assert isinstance(added, Success)
    view = service.get_cart(GetCartQuery("s-1")).unwrap()
    assert view.session_id == SessionId("s-1")
    assert view.status is CartStatus.NON_EMPTY
    assert view.total_items == 1
    assert view.total_value == Money.of("12.00")
    assert view.lines[0].name == "Margherita"


def test_sessions_are_isolated(service):
    service.add_item(_add("s-1", 1))

    other = service.get_cart(GetCartQuery("s-2")).unwrap()

    assert other.status is CartStatus.EMPTY


def test_full_lifecycle_publishes_events(service, publisher):
    service.add_item(_add("s-1", 1))
    service.increment_item_quantity(ChangeQuantityCommand("s-1", 1))
    service.decrement_item_quantity(ChangeQuantityCommand("s-1", 1))
    service.remove_item(RemoveItemCommand("s-1", 1))
    service.clear_cart(ClearCartCommand("s-1"))

    assert [e.kind for e in publisher.events] == [
        "item_added",
        "quantity_incremented",
        "quantity_decremented",
        "item_removed",
        "cart_cleared",
    ]
    assert publisher.events[0].pizza_id == PizzaId(1)
    assert publisher.events[-1].pizza_id is None


def test_quantity_of(service):
    service.add_item(_add("s-1", 7))
    service.increment_item_quantity(ChangeQuantityCommand("s-1", 7))

    assert service.quantity_of(QuantityQuery("s-1", 7)).unwrap() == 2
    assert service.quantity_of(QuantityQuery("s-1", 8)).unwrap() == 0


def test_increment_missing_item_leaves_cart_unchanged(service, publisher):
    service.add_item(_add("s-1", 1))
    before = service.get_cart(GetCartQuery("s-1")).unwrap()

    result = service.increment_item_quantity(ChangeQuantityCommand("s-1", 99))

    assert isinstance(result, Failure)
    assert isinstance(result.failure(), ItemNotFound)
    assert service.get_cart(GetCartQuery("s-1")).unwrap() == before
    assert [e.kind for e in publisher.events] == ["item_added"]


@pytest.mark.parametrize(
    "command",
    [
        AddItemCommand("s-1", 1, "Margherita", Decimal("0")),
        AddItemCommand("s-1", 1, "Margherita", Decimal("-1")),
        AddItemCommand("s-1", 1, "Margherita", Decimal("10"), quantity=2),
        AddItemCommand("s-1", 1, "", Decimal("10")),
        AddItemCommand("  ", 1, "Margherita", Decimal("10")),
        AddItemCommand("s-1", 1, "Margherita", Decimal("NaN")),
        AddItemCommand("s-1", 1, "Margherita", Decimal("Infinity")),
        AddItemCommand("s-1", 1, "Margherita", Decimal("1e30")),
        AddItemCommand("s-1", 1, "Margherita", Decimal("1000000.01")),
        AddItemCommand("s-1", 1, "Margherita", "abc"),  # type: ignore[arg-type]
    ],
)
def test_add_rejects_bad_commands(service, publisher, command):
    result = service.add_item(command)

    assert isinstance(result.failure(), ValidationError)
    assert publisher.events == []
    assert service.get_cart(GetCartQuery("s-1")).unwrap().total_items == 0


def test_blank_session_rejected_for_queries(service):
    assert isinstance(service.get_cart(GetCartQuery("")).failure(), ValidationError)
    assert isinstance(service.quantity_of(QuantityQuery(" ", 1)).failure(), ValidationError)


def test_reject_policy_surfaces_duplicate(publisher):
    svc = CartService(
        CartDeps(
            carts=InMemoryCartRepository(),
            events=publisher,
            duplicate_policy=DuplicatePolicy.REJECT,
        )
    )
    svc.add_item(_add("s-1", 1))

    result = svc.add_item(_add("s-1", 1))

    assert isinstance(result.failure(), DuplicateItem)


def test_publish_failure_does_not_undo_the_command():
    svc = CartService(
        CartDeps(carts=InMemoryCartRepository(), events=RecordingPublisher(fail=True))
    )

    result = svc.add_item(_add("s-1", 1))

    assert isinstance(result, Success)
    assert svc.quantity_of(QuantityQuery("s-1", 1)).unwrap() == 1


def test_configured_currency_flows_into_prices(publisher):
    svc = CartService(
        CartDeps(carts=InMemoryCartRepository(), events=publisher, currency="USD")
    )

    view = svc.add_item(_add("s-1", 1, "3.50")).unwrap()

    assert view.total_value == Money.of("3.50", currency="USD")
    assert view.lines[0].unit_price.currency == "USD"


def test_add_accepts_the_largest_unit_price(service):
    view = service.add_item(_add("s-1", 1, "1000000.00")).unwrap()

    assert view.total_value == Money.of("1000000.00")
