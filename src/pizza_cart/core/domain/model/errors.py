from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationError(CartError):
    pass


@dataclass(frozen=True)
class ItemNotFound(CartError):
    pizza_id: int

    def __str__(self) -> str:
        return f"item_not_found: pizza_id={self.pizza_id} ({self.message})"


@dataclass(frozen=True)
class DuplicateItem(CartError):
    pizza_id: int

    def __str__(self) -> str:
        return f"duplicate_item: pizza_id={self.pizza_id} ({self.message})"


@dataclass(frozen=True)
class PublishError(CartError):
    pass
