from __future__ import annotations

from decimal import Decimal

from returns.result import Failure, Result, Success

from pizza_cart.core.domain.model.cart import MAX_UNIT_PRICE, LineItem
from pizza_cart.core.domain.model.errors import CartError, ValidationError


def check_unit_price(amount: Decimal) -> Result[Decimal, CartError]:
    # finiteness first: comparing NaN raises InvalidOperation
    if not amount.is_finite():
        return Failure(ValidationError("unit_price must be a finite number"))
    if amount <= 0:
        return Failure(ValidationError("unit_price must be > 0"))
    if amount > MAX_UNIT_PRICE:
        return Failure(ValidationError(f"unit_price must be <= {MAX_UNIT_PRICE}"))
    return Success(amount)


def validate_name(item: LineItem) -> Result[LineItem, CartError]:
    if not item.name.strip():
        return Failure(ValidationError("name is required"))
    return Success(item)


def validate_unit_price(item: LineItem) -> Result[LineItem, CartError]:
    return check_unit_price(item.unit_price.amount).map(lambda _: item)


def validate_initial_quantity(item: LineItem) -> Result[LineItem, CartError]:
    if item.quantity != 1:
        return Failure(ValidationError("quantity must be 1 when adding an item"))
    if item.total_price != item.unit_price:
        return Failure(ValidationError("total_price must equal unit_price * quantity"))
    return Success(item)


def validate_new_item(item: LineItem) -> Result[LineItem, CartError]:
    return (
        Success(item)
        .bind(validate_name)
        .bind(validate_unit_price)
        .bind(validate_initial_quantity)
    )
