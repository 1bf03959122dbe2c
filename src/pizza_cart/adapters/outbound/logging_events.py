from __future__ import annotations

import logging
from dataclasses import dataclass

from returns.result import Failure, Result, Success

from pizza_cart.core.domain.model.errors import CartError, PublishError
from pizza_cart.core.ports.outbound.events import CartEvent, EventPublisher

logger = logging.getLogger(__name__)


@dataclass
class LoggingEventPublisher(EventPublisher):
    fail: bool = False

    def publish(self, event: CartEvent) -> Result[None, CartError]:
        if self.fail:
            return Failure(PublishError(message="publisher is down"))
        pizza = event.pizza_id.value if event.pizza_id is not None else "-"
        logger.info(
            "[event] %s: session=%s pizza_id=%s",
            event.kind,
            event.session_id.value,
            pizza,
        )
        return Success(None)
