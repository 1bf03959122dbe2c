from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Result, Success

from pizza_cart.core.domain.model.cart import MAX_UNIT_PRICE
from pizza_cart.core.domain.model.errors import (
    CartError,
    DuplicateItem,
    ItemNotFound,
    ValidationError,
)
from pizza_cart.core.ports.inbound.cart import (
    AddItemCommand,
    CartUseCase,
    CartView,
    ChangeQuantityCommand,
    ClearCartCommand,
    GetCartQuery,
    QuantityQuery,
    RemoveItemCommand,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class AddItemRequest(BaseModel):
    pizza_id: int = Field(examples=[1])
    name: str = Field(min_length=1, examples=["Margherita"])
    unit_price: Decimal = Field(
        gt=0,
        le=MAX_UNIT_PRICE,
        max_digits=12,
        allow_inf_nan=False,
        examples=["12.00"],
    )
    quantity: int = Field(1, examples=[1])


class CartLineOut(BaseModel):
    pizza_id: int
    name: str
    quantity: int
    unit_price: str
    total_price: str


class CartResponse(BaseModel):
    session_id: str
    status: str
    total_items: int
    total_value: str
    currency: str
    lines: list[CartLineOut]


class QuantityResponse(BaseModel):
    pizza_id: int
    quantity: int


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _map_error_to_http(err: CartError) -> tuple[int, ErrorResponse]:
    if isinstance(err, ValidationError):
        return 400, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, ItemNotFound):
        return 404, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, DuplicateItem):
        return 409, ErrorResponse(type=type(err).__name__, message=str(err))

    return 500, ErrorResponse(type=type(err).__name__, message=str(err))


def _to_response(view: CartView) -> CartResponse:
    return CartResponse(
        session_id=view.session_id.value,
        status=view.status.value,
        total_items=view.total_items,
        total_value=str(view.total_value.amount),
        currency=view.total_value.currency,
        lines=[
            CartLineOut(
                pizza_id=ln.pizza_id.value,
                name=ln.name,
                quantity=ln.quantity,
                unit_price=str(ln.unit_price.amount),
                total_price=str(ln.total_price.amount),
            )
            for ln in view.lines
        ],
    )


def _respond(
    result: Result[_T, CartError], to_body: Callable[[_T], BaseModel]
) -> Any:
    if isinstance(result, Success):
        return to_body(result.unwrap())
    status, body = _map_error_to_http(result.failure())
    return JSONResponse(status_code=status, content=body.model_dump())


# ---- App factory -----------------------------------------------------------


def create_app(cart_uc: CartUseCase, title: str = "pizza_cart") -> FastAPI:
    app = FastAPI(title=title)

    # --- exception handlers ---------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[
                {"loc": list(e.get("loc", ())), "msg": str(e.get("msg", ""))}
                for e in exc.errors()
            ],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error")
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes ---------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/carts/{session_id}", response_model=CartResponse, responses=_ERROR_RESPONSES)
    def get_cart(session_id: str) -> Any:
        result = cart_uc.get_cart(GetCartQuery(session_id=session_id))
        return _respond(result, _to_response)

    @app.delete(
        "/carts/{session_id}", response_model=CartResponse, responses=_ERROR_RESPONSES
    )
    def clear_cart(session_id: str) -> Any:
        result = cart_uc.clear_cart(ClearCartCommand(session_id=session_id))
        return _respond(result, _to_response)

    @app.post(
        "/carts/{session_id}/items",
        response_model=CartResponse,
        status_code=201,
        responses={**_ERROR_RESPONSES, 409: {"model": ErrorResponse}},
    )
    def add_item(session_id: str, req: AddItemRequest) -> Any:
        result = cart_uc.add_item(
            AddItemCommand(
                session_id=session_id,
                pizza_id=req.pizza_id,
                name=req.name,
                unit_price=req.unit_price,
                quantity=req.quantity,
            )
        )
        return _respond(result, _to_response)

    @app.delete(
        "/carts/{session_id}/items/{pizza_id}",
        response_model=CartResponse,
        responses=_ERROR_RESPONSES,
    )
    def remove_item(session_id: str, pizza_id: int) -> Any:
        result = cart_uc.remove_item(
            RemoveItemCommand(session_id=session_id, pizza_id=pizza_id)
        )
        return _respond(result, _to_response)

    @app.post(
        "/carts/{session_id}/items/{pizza_id}/increment",
        response_model=CartResponse,
        responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    )
    def increment_item(session_id: str, pizza_id: int) -> Any:
        result = cart_uc.increment_item_quantity(
            ChangeQuantityCommand(session_id=session_id, pizza_id=pizza_id)
        )
        return _respond(result, _to_response)

    @app.post(
        "/carts/{session_id}/items/{pizza_id}/decrement",
        response_model=CartResponse,
        responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
    )
    def decrement_item(session_id: str, pizza_id: int) -> Any:
        result = cart_uc.decrement_item_quantity(
            ChangeQuantityCommand(session_id=session_id, pizza_id=pizza_id)
        )
        return _respond(result, _to_response)

    @app.get(
        "/carts/{session_id}/items/{pizza_id}/quantity",
        response_model=QuantityResponse,
        responses=_ERROR_RESPONSES,
    )
    def item_quantity(session_id: str, pizza_id: int) -> Any:
        result = cart_uc.quantity_of(
            QuantityQuery(session_id=session_id, pizza_id=pizza_id)
        )
        return _respond(
            result, lambda qty: QuantityResponse(pizza_id=pizza_id, quantity=qty)
        )

    return app
