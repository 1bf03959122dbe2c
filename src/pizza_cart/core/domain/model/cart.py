from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Tuple

DEFAULT_CURRENCY = "EUR"
_CENT = Decimal("0.01")
# largest unit price Add accepts
MAX_UNIT_PRICE = Decimal("1000000.00")


@dataclass(frozen=True)
class PizzaId:
    value: int


@dataclass(frozen=True)
class SessionId:
    value: str


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    @staticmethod
    def of(amount: Decimal | int | str, currency: str = DEFAULT_CURRENCY) -> "Money":
        dec = Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)
        return Money(dec, currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> "Money":
        return Money.of(0, currency=currency)

    def __add__(self, other: "Money") -> "Money":
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, n: int) -> "Money":
        return Money(
            (self.amount * Decimal(n)).quantize(_CENT, rounding=ROUND_HALF_UP),
            self.currency,
        )

    def _assert_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValueError(f"currency_mismatch: {self.currency} vs {other.currency}")


@dataclass(frozen=True)
class LineItem:
    pizza_id: PizzaId
    name: str
    quantity: int
    unit_price: Money
    total_price: Money

    @staticmethod
    def new(pizza_id: PizzaId, name: str, unit_price: Money) -> "LineItem":
        """A fresh line as the menu hands it to the cart: one unit."""
        return LineItem(
            pizza_id=pizza_id,
            name=name,
            quantity=1,
            unit_price=unit_price,
            total_price=unit_price * 1,
        )

    def with_quantity(self, quantity: int) -> "LineItem":
        # total_price is always derived from the new quantity
        return replace(self, quantity=quantity, total_price=self.unit_price * quantity)


class CartStatus(str, Enum):
    EMPTY = "empty"
    NON_EMPTY = "non_empty"


@dataclass(frozen=True)
class Cart:
    items: Tuple[LineItem, ...] = ()

    @staticmethod
    def empty() -> "Cart":
        return Cart(())

    def __len__(self) -> int:
        return len(self.items)

    def find(self, pizza_id: PizzaId) -> LineItem | None:
        return next((it for it in self.items if it.pizza_id == pizza_id), None)


def fold_money(values: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
    total = Money.zero(currency=currency)
    for v in values:
        total = total + v
    return total
