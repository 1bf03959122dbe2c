from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from returns.pipeline import flow
from returns.pointfree import bind, map_
from returns.result import Failure, Result, Success

from pizza_cart.core.domain.model.cart import (
    DEFAULT_CURRENCY,
    Cart,
    LineItem,
    Money,
    PizzaId,
    SessionId,
)
from pizza_cart.core.domain.model.errors import CartError, ValidationError
from pizza_cart.core.domain.service.cart_queries import (
    cart_status,
    current_quantity_by_id,
    snapshot,
    total_cart_value,
    total_item_count,
)
from pizza_cart.core.domain.service import cart_store
from pizza_cart.core.domain.service.cart_store import DuplicatePolicy
from pizza_cart.core.domain.service.validation import check_unit_price
from pizza_cart.core.ports.inbound.cart import (
    AddItemCommand,
    CartLineView,
    CartUseCase,
    CartView,
    ChangeQuantityCommand,
    ClearCartCommand,
    GetCartQuery,
    QuantityQuery,
    RemoveItemCommand,
)
from pizza_cart.core.ports.outbound.carts import CartRepository, Transition
from pizza_cart.core.ports.outbound.events import CartEvent, EventPublisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartDeps:
    carts: CartRepository
    events: EventPublisher
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.APPEND
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class CartService(CartUseCase):
    deps: CartDeps

    # ---- commands ----------------------------------------------------------

    def add_item(self, command: AddItemCommand) -> Result[CartView, CartError]:
        return flow(
            command,
            _validate_add_command,
            map_(self._to_line_item),
            bind(
                lambda item: self._mutate(
                    command.session_id,
                    lambda cart: cart_store.add_item(
                        cart, item, self.deps.duplicate_policy
                    ),
                    "item_added",
                    item.pizza_id,
                )
            ),
        )

    def remove_item(self, command: RemoveItemCommand) -> Result[CartView, CartError]:
        pizza_id = PizzaId(command.pizza_id)
        return self._mutate(
            command.session_id,
            lambda cart: cart_store.remove_item(cart, pizza_id),
            "item_removed",
            pizza_id,
        )

    def clear_cart(self, command: ClearCartCommand) -> Result[CartView, CartError]:
        return self._mutate(
            command.session_id, cart_store.clear_cart, "cart_cleared", None
        )

    def increment_item_quantity(
        self, command: ChangeQuantityCommand
    ) -> Result[CartView, CartError]:
        pizza_id = PizzaId(command.pizza_id)
        return self._mutate(
            command.session_id,
            lambda cart: cart_store.increment_item_quantity(cart, pizza_id),
            "quantity_incremented",
            pizza_id,
        )

    def decrement_item_quantity(
        self, command: ChangeQuantityCommand
    ) -> Result[CartView, CartError]:
        pizza_id = PizzaId(command.pizza_id)
        return self._mutate(
            command.session_id,
            lambda cart: cart_store.decrement_item_quantity(cart, pizza_id),
            "quantity_decremented",
            pizza_id,
        )

    # ---- queries -----------------------------------------------------------

    def get_cart(self, query: GetCartQuery) -> Result[CartView, CartError]:
        return _session_id(query.session_id).bind(
            lambda sid: self.deps.carts.get(sid).map(lambda cart: self._to_view(sid, cart))
        )

    def quantity_of(self, query: QuantityQuery) -> Result[int, CartError]:
        pizza_id = PizzaId(query.pizza_id)
        return _session_id(query.session_id).bind(
            lambda sid: self.deps.carts.get(sid).map(
                lambda cart: current_quantity_by_id(cart, pizza_id)
            )
        )

    # ---- internals ---------------------------------------------------------

    def _mutate(
        self,
        raw_session_id: str,
        transition: Transition,
        kind: str,
        pizza_id: PizzaId | None,
    ) -> Result[CartView, CartError]:
        sid = _session_id(raw_session_id)
        if isinstance(sid, Failure):
            return sid
        session = sid.unwrap()

        result = self.deps.carts.apply(session, transition)
        if isinstance(result, Failure):
            logger.debug("cart command %s rejected: %s", kind, result.failure())
            return result

        published = self.deps.events.publish(CartEvent(kind, session, pizza_id))
        if isinstance(published, Failure):
            # the transition is already committed; a lost event does not undo it
            logger.warning("cart event %s not published: %s", kind, published.failure())

        return result.map(lambda cart: self._to_view(session, cart))

    def _to_line_item(self, cmd: AddItemCommand) -> LineItem:
        price = Money.of(cmd.unit_price, currency=self.deps.currency)
        return LineItem(
            pizza_id=PizzaId(cmd.pizza_id),
            name=cmd.name,
            quantity=cmd.quantity,
            unit_price=price,
            total_price=price * cmd.quantity,
        )

    def _to_view(self, session_id: SessionId, cart: Cart) -> CartView:
        return CartView(
            session_id=session_id,
            status=cart_status(cart),
            total_items=total_item_count(cart),
            total_value=total_cart_value(cart, currency=self.deps.currency),
            lines=tuple(
                CartLineView(
                    pizza_id=it.pizza_id,
                    name=it.name,
                    quantity=it.quantity,
                    unit_price=it.unit_price,
                    total_price=it.total_price,
                )
                for it in snapshot(cart)
            ),
        )


# ---- pure helpers ----------------------------------------------------------


def _session_id(raw: str) -> Result[SessionId, CartError]:
    if not raw.strip():
        return Failure(ValidationError("session_id is required"))
    return Success(SessionId(raw.strip()))


def _validate_add_command(cmd: AddItemCommand) -> Result[AddItemCommand, CartError]:
    if not cmd.session_id.strip():
        return Failure(ValidationError("session_id is required"))
    if not cmd.name.strip():
        return Failure(ValidationError("name is required"))
    if cmd.quantity != 1:
        return Failure(ValidationError("quantity must be 1 when adding an item"))
    return _parse_price(cmd.unit_price).bind(check_unit_price).map(lambda _: cmd)


def _parse_price(raw: object) -> Result[Decimal, CartError]:
    try:
        return Success(Decimal(str(raw)))
    except InvalidOperation:
        return Failure(ValidationError(f"unit_price is not a number: {raw!r}"))
