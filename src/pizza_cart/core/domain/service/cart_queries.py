from __future__ import annotations

from typing import Tuple

from pizza_cart.core.domain.model.cart import (
    DEFAULT_CURRENCY,
    Cart,
    CartStatus,
    LineItem,
    Money,
    PizzaId,
    fold_money,
)


def total_item_count(cart: Cart) -> int:
    return sum(it.quantity for it in cart.items)


def total_cart_value(cart: Cart, currency: str = DEFAULT_CURRENCY) -> Money:
    if cart.items:
        currency = cart.items[0].total_price.currency
    return fold_money((it.total_price for it in cart.items), currency=currency)


def current_quantity_by_id(cart: Cart, pizza_id: PizzaId) -> int:
    """0 when the pizza is not in the cart; absence is not an error here."""
    item = cart.find(pizza_id)
    return item.quantity if item is not None else 0


def snapshot(cart: Cart) -> Tuple[LineItem, ...]:
    return cart.items


def cart_status(cart: Cart) -> CartStatus:
    return CartStatus.NON_EMPTY if cart.items else CartStatus.EMPTY
