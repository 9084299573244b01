"""Validation of entity field values."""

from .validator import EntityValidator, ValidationOutcome, validate

__all__ = ["EntityValidator", "ValidationOutcome", "validate"]
