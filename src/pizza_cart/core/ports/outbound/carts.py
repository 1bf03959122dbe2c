from __future__ import annotations

from typing import Callable, Protocol

from returns.result import Result

from pizza_cart.core.domain.model.cart import Cart, SessionId
from pizza_cart.core.domain.model.errors import CartError

Transition = Callable[[Cart], Result[Cart, CartError]]


class CartRepository(Protocol):
    """
    Holds one cart per session. ``apply`` must run the transition and store
    its outcome as a single step so no reader sees a half-applied command.
    """

    def get(self, session_id: SessionId) -> Result[Cart, CartError]:
        """Unknown sessions read as an empty cart."""
        ...

    def apply(
        self, session_id: SessionId, transition: Transition
    ) -> Result[Cart, CartError]: ...
