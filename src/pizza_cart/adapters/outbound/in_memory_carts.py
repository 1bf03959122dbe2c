from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict

from returns.result import Result, Success

from pizza_cart.core.domain.model.cart import Cart, SessionId
from pizza_cart.core.domain.model.errors import CartError
from pizza_cart.core.ports.outbound.carts import CartRepository, Transition


@dataclass
class InMemoryCartRepository(CartRepository):
    _store: Dict[str, Cart] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, session_id: SessionId) -> Result[Cart, CartError]:
        with self._lock:
            return Success(self._store.get(session_id.value, Cart.empty()))

    def apply(
        self, session_id: SessionId, transition: Transition
    ) -> Result[Cart, CartError]:
        with self._lock:
            current = self._store.get(session_id.value, Cart.empty())
            result = transition(current)
            # commit only on success; a failed transition leaves the cart as it was
            if isinstance(result, Success):
                self._store[session_id.value] = result.unwrap()
            return result
