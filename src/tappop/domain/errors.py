"""Domain-specific exceptions."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when transaction parameters violate a validation rule.

    Attributes:
        field: Wire name of the offending field (e.g. ``"apiKey"``).
        message: Human-readable description of the violated rule.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, message={self.message!r})"
