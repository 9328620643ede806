from __future__ import annotations


class FarmplotError(Exception):
    """Base class for farmplot errors."""


class InvalidInputError(FarmplotError, ValueError):
    """Raised when a boundary does not have exactly four points."""
