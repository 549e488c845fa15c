"""Precondition failures raised by the round level renderer."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when render inputs violate a precondition."""


class InvalidConfiguration(InvalidInput):
    """Raised when the base unit is not a positive integer."""


class InvalidVisibleRange(InvalidInput):
    """Raised when the visible price range is inverted or not finite."""


__all__ = ["InvalidInput", "InvalidConfiguration", "InvalidVisibleRange"]
