from __future__ import annotations

from fastapi import FastAPI

from pizza_cart.adapters.inbound.web.fastapi_app import create_app
from pizza_cart.adapters.outbound.in_memory_carts import InMemoryCartRepository
from pizza_cart.adapters.outbound.logging_events import LoggingEventPublisher
from pizza_cart.config import Settings, get_settings
from pizza_cart.core.domain.service.cart_service import CartDeps, CartService
from pizza_cart.logging_config import configure_logging


def build_cart_service(settings: Settings | None = None) -> CartService:
    settings = settings or get_settings()
    return CartService(
        CartDeps(
            carts=InMemoryCartRepository(),
            events=LoggingEventPublisher(),
            duplicate_policy=settings.duplicate_policy,
            currency=settings.currency,
        )
    )


def create_asgi_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)
    return create_app(build_cart_service(settings), title=settings.app_name)
