from __future__ import annotations

import sys

import uvicorn

from pizza_cart.adapters.inbound.cli import run_cli
from pizza_cart.bootstrap import build_cart_service
from pizza_cart.config import get_settings
from pizza_cart.logging_config import configure_logging


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "pizza_cart.bootstrap:create_asgi_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


def cli(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print("usage: pizza-cart-cli '<json>'")
        return 2

    settings = get_settings()
    configure_logging(settings)
    return run_cli(build_cart_service(settings), argv[0])


if __name__ == "__main__":
    raise SystemExit(cli())
