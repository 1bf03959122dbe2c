from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Callable

from returns.result import Result, Success

from pizza_cart.core.domain.model.errors import CartError
from pizza_cart.core.ports.inbound.cart import (
    AddItemCommand,
    CartUseCase,
    CartView,
    ChangeQuantityCommand,
    ClearCartCommand,
    GetCartQuery,
    RemoveItemCommand,
)

CLI_SESSION = "cli"

Step = Callable[[CartUseCase], Result[CartView, CartError]]


def run_cli(usecase: CartUseCase, raw: str) -> int:
    """
    raw: JSON list of cart operations, applied in order to one fresh session.
    Example:
      [{"op":"add","pizza_id":1,"name":"Margherita","unit_price":"12.00"},
       {"op":"increment","pizza_id":1},
       {"op":"decrement","pizza_id":1}]
    """
    try:
        payload = json.loads(raw)
        steps = _parse_steps(payload)
    except Exception as e:  # noqa: BLE001
        print(f"invalid_input: {e}")
        return 2

    for step in steps:
        result = step(usecase)
        if not isinstance(result, Success):
            print("[ng]", str(result.failure()))
            return 1

    final = usecase.get_cart(GetCartQuery(session_id=CLI_SESSION))
    if not isinstance(final, Success):
        print("[ng]", str(final.failure()))
        return 1

    print("[ok]", _render(final.unwrap()))
    return 0


def _parse_steps(payload: Any) -> list[Step]:
    if not isinstance(payload, list):
        raise ValueError("expected a JSON list of operations")
    return [_parse_step(x) for x in payload]


def _parse_step(x: dict[str, Any]) -> Step:
    op = str(x["op"])
    if op == "add":
        cmd = AddItemCommand(
            session_id=CLI_SESSION,
            pizza_id=int(x["pizza_id"]),
            name=str(x["name"]),
            unit_price=Decimal(str(x["unit_price"])),
            quantity=int(x.get("quantity", 1)),
        )
        return lambda uc: uc.add_item(cmd)
    if op == "remove":
        rm = RemoveItemCommand(session_id=CLI_SESSION, pizza_id=int(x["pizza_id"]))
        return lambda uc: uc.remove_item(rm)
    if op == "clear":
        return lambda uc: uc.clear_cart(ClearCartCommand(session_id=CLI_SESSION))
    if op in ("increment", "decrement"):
        change = ChangeQuantityCommand(
            session_id=CLI_SESSION, pizza_id=int(x["pizza_id"])
        )
        if op == "increment":
            return lambda uc: uc.increment_item_quantity(change)
        return lambda uc: uc.decrement_item_quantity(change)
    raise ValueError(f"unknown op: {op}")


def _render(view: CartView) -> dict[str, Any]:
    return {
        "status": view.status.value,
        "total_items": view.total_items,
        "total_value": str(view.total_value.amount),
        "currency": view.total_value.currency,
        "lines": [
            {
                "pizza_id": ln.pizza_id.value,
                "name": ln.name,
                "quantity": ln.quantity,
                "total_price": str(ln.total_price.amount),
            }
            for ln in view.lines
        ],
    }
