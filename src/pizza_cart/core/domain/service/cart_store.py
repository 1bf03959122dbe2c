"""
Cart commands.

Every command is a pure transition ``Cart -> Result[Cart, CartError]``.
A failed command never yields a partially updated cart: the caller keeps
the cart it passed in.
"""
from __future__ import annotations

from decimal import InvalidOperation
from enum import Enum
from typing import Tuple

from returns.result import Failure, Result, Success

from pizza_cart.core.domain.model.cart import Cart, LineItem, PizzaId
from pizza_cart.core.domain.model.errors import (
    CartError,
    DuplicateItem,
    ItemNotFound,
    ValidationError,
)
from pizza_cart.core.domain.service.validation import validate_new_item


class DuplicatePolicy(str, Enum):
    APPEND = "append"  # keep a second line for the same pizza_id
    MERGE = "merge"  # bump the quantity of the existing line
    REJECT = "reject"


def add_item(
    cart: Cart, item: LineItem, policy: DuplicatePolicy = DuplicatePolicy.APPEND
) -> Result[Cart, CartError]:
    return (
        validate_new_item(item)
        .bind(lambda it: _check_currency(cart, it))
        .bind(lambda it: _append(cart, it, policy))
    )


def remove_item(cart: Cart, pizza_id: PizzaId) -> Result[Cart, CartError]:
    return Success(_without(cart, pizza_id))


def clear_cart(_: Cart) -> Result[Cart, CartError]:
    return Success(Cart.empty())


def increment_item_quantity(cart: Cart, pizza_id: PizzaId) -> Result[Cart, CartError]:
    return _change_quantity(cart, pizza_id, +1)


def decrement_item_quantity(cart: Cart, pizza_id: PizzaId) -> Result[Cart, CartError]:
    return _change_quantity(cart, pizza_id, -1)


# ---- helpers ---------------------------------------------------------------


def _check_currency(cart: Cart, item: LineItem) -> Result[LineItem, CartError]:
    if cart.items and cart.items[0].unit_price.currency != item.unit_price.currency:
        return Failure(
            ValidationError(
                f"currency {item.unit_price.currency} does not match cart currency "
                f"{cart.items[0].unit_price.currency}"
            )
        )
    return Success(item)


def _append(
    cart: Cart, item: LineItem, policy: DuplicatePolicy
) -> Result[Cart, CartError]:
    if cart.find(item.pizza_id) is None or policy is DuplicatePolicy.APPEND:
        return Success(Cart(cart.items + (item,)))

    if policy is DuplicatePolicy.MERGE:
        return increment_item_quantity(cart, item.pizza_id)

    return Failure(
        DuplicateItem(message="item already in cart", pizza_id=item.pizza_id.value)
    )


def _without(cart: Cart, pizza_id: PizzaId) -> Cart:
    return Cart(tuple(it for it in cart.items if it.pizza_id != pizza_id))


def _change_quantity(
    cart: Cart, pizza_id: PizzaId, delta: int
) -> Result[Cart, CartError]:
    index = _index_of(cart, pizza_id)
    if index is None:
        return Failure(
            ItemNotFound(message="item is not in the cart", pizza_id=pizza_id.value)
        )

    current = cart.items[index]
    try:
        item = current.with_quantity(current.quantity + delta)
    except InvalidOperation:
        # the new total no longer fits the decimal context
        return Failure(
            ValidationError(f"total_price overflow for pizza_id={pizza_id.value}")
        )

    if item.quantity <= 0:
        # dropping to zero removes every line for this pizza_id
        return Success(_without(cart, pizza_id))

    items: Tuple[LineItem, ...] = (
        cart.items[:index] + (item,) + cart.items[index + 1 :]
    )
    return Success(Cart(items))


def _index_of(cart: Cart, pizza_id: PizzaId) -> int | None:
    for i, it in enumerate(cart.items):
        if it.pizza_id == pizza_id:
            return i
    return None
