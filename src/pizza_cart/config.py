from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pizza_cart.core.domain.service.cart_store import DuplicatePolicy


class Settings(BaseSettings):
    """
    Runtime settings, read from ``PIZZA_CART_*`` environment variables
    (or a local ``.env``).
    """

    model_config = SettingsConfigDict(
        env_prefix="PIZZA_CART_", env_file=".env", extra="ignore"
    )

    app_name: str = "pizza_cart"
    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    log_format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    currency: str = Field("EUR", min_length=3, max_length=3)
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.APPEND


@lru_cache
def get_settings() -> Settings:
    return Settings()
