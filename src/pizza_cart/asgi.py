from __future__ import annotations

from pizza_cart.bootstrap import create_asgi_app

app = create_asgi_app()
