from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Sequence

from returns.result import Result

from pizza_cart.core.domain.model.cart import CartStatus, Money, PizzaId, SessionId
from pizza_cart.core.domain.model.errors import CartError


@dataclass(frozen=True)
class AddItemCommand:
    session_id: str
    pizza_id: int
    name: str
    unit_price: Decimal
    quantity: int = 1


@dataclass(frozen=True)
class RemoveItemCommand:
    session_id: str
    pizza_id: int


@dataclass(frozen=True)
class ClearCartCommand:
    session_id: str


@dataclass(frozen=True)
class ChangeQuantityCommand:
    session_id: str
    pizza_id: int


@dataclass(frozen=True)
class GetCartQuery:
    session_id: str


@dataclass(frozen=True)
class QuantityQuery:
    session_id: str
    pizza_id: int


@dataclass(frozen=True)
class CartLineView:
    pizza_id: PizzaId
    name: str
    quantity: int
    unit_price: Money
    total_price: Money


@dataclass(frozen=True)
class CartView:
    session_id: SessionId
    status: CartStatus
    total_items: int
    total_value: Money
    lines: Sequence[CartLineView]


class CartUseCase(Protocol):
    def add_item(self, command: AddItemCommand) -> Result[CartView, CartError]: ...

    def remove_item(self, command: RemoveItemCommand) -> Result[CartView, CartError]: ...

    def clear_cart(self, command: ClearCartCommand) -> Result[CartView, CartError]: ...

    def increment_item_quantity(
        self, command: ChangeQuantityCommand
    ) -> Result[CartView, CartError]: ...

    def decrement_item_quantity(
        self, command: ChangeQuantityCommand
    ) -> Result[CartView, CartError]: ...

    def get_cart(self, query: GetCartQuery) -> Result[CartView, CartError]: ...

    def quantity_of(self, query: QuantityQuery) -> Result[int, CartError]: ...
