"""Exception types raised by the queue engine."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """A parameter is missing, non-finite or outside its domain."""


class UnstableSystemError(ValueError):
    """The requested model does not apply to this combination of rates."""
