from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from pizza_cart.config import Settings
from pizza_cart.core.domain.service.cart_store import DuplicatePolicy
from pizza_cart.logging_config import ROOT_LOGGER, configure_logging


def test_defaults(monkeypatch):
    for name in ("PIZZA_CART_CURRENCY", "PIZZA_CART_DUPLICATE_POLICY", "PIZZA_CART_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.currency == "EUR"
    assert settings.duplicate_policy is DuplicatePolicy.APPEND
    assert settings.port == 8000


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PIZZA_CART_CURRENCY", "USD")
    monkeypatch.setenv("PIZZA_CART_DUPLICATE_POLICY", "merge")
    monkeypatch.setenv("PIZZA_CART_PORT", "9001")

    settings = Settings(_env_file=None)

    assert settings.currency == "USD"
    assert settings.duplicate_policy is DuplicatePolicy.MERGE
    assert settings.port == 9001


def test_unknown_policy_rejected(monkeypatch):
    monkeypatch.setenv("PIZZA_CART_DUPLICATE_POLICY", "explode")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_configure_logging_is_idempotent():
    settings = Settings(_env_file=None, log_level="DEBUG")

    first = configure_logging(settings)
    second = configure_logging(settings)

    assert first is second is logging.getLogger(ROOT_LOGGER)
    assert len(first.handlers) == 1
    assert first.level == logging.DEBUG


def test_unknown_log_level_rejected(monkeypatch):
    monkeypatch.setenv("PIZZA_CART_LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
