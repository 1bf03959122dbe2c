from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from pizza_cart.core.domain.model.cart import PizzaId, SessionId
from pizza_cart.core.domain.model.errors import CartError


@dataclass(frozen=True)
class CartEvent:
    kind: str  # item_added | item_removed | cart_cleared | quantity_incremented | quantity_decremented
    session_id: SessionId
    pizza_id: PizzaId | None = None


class EventPublisher(Protocol):
    def publish(self, event: CartEvent) -> Result[None, CartError]: ...
