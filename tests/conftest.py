"""Shared pytest fixtures for the cart tests."""
from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from returns.result import Failure, Result, Success

from pizza_cart.adapters.outbound.in_memory_carts import InMemoryCartRepository
from pizza_cart.core.domain.model.cart import LineItem, Money, PizzaId
from pizza_cart.core.domain.model.errors import CartError, PublishError
from pizza_cart.core.domain.service.cart_service import CartDeps, CartService
from pizza_cart.core.domain.service.cart_store import DuplicatePolicy
from pizza_cart.core.ports.outbound.events import CartEvent


def make_item(pizza_id: int, price: str | int, name: str = "Pizza") -> LineItem:
    return LineItem.new(PizzaId(pizza_id), name, Money.of(price))


@dataclass
class RecordingPublisher:
    fail: bool = False
    events: list[CartEvent] = field(default_factory=list)

    def publish(self, event: CartEvent) -> Result[None, CartError]:
        if self.fail:
            return Failure(PublishError(message="publisher is down"))
        self.events.append(event)
        return Success(None)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def service(publisher: RecordingPublisher) -> CartService:
    return CartService(
        CartDeps(
            carts=InMemoryCartRepository(),
            events=publisher,
            duplicate_policy=DuplicatePolicy.APPEND,
            currency="EUR",
        )
    )
