"""
Error types raised by the analysis core.

Validation failures are user-correctable: sessions and the workflow turn
them into messages instead of letting them propagate. Catalog and
transition errors are programming defects and do propagate.
"""

from __future__ import annotations

from dataclasses import dataclass


class PromocheckError(Exception):
    """Base class for every error raised by promocheck."""


class ValidationFailure(PromocheckError):
    """Input the caller can fix and resubmit."""


class ContentValidationError(ValidationFailure):
    def __init__(self, message: str, length: int = 0):
        super().__init__(message)
        self.length = length


class QualificationRequiredError(ValidationFailure):
    pass


class CatalogError(PromocheckError):
    """A rule catalog failed validation at construction time."""

    def __init__(self, rule_id: str, reason: str):
        super().__init__(f"rule {rule_id!r}: {reason}")
        self.rule_id = rule_id
        self.reason = reason


class InvalidTransitionError(PromocheckError):
    def __init__(self, current: str, target: str):
        super().__init__(f"cannot move workflow from {current} to {target}")
        self.current = current
        self.target = target


@dataclass(frozen=True)
class ErrorState:
    """A caught failure as shown to the user. kind is "validation" or "internal"."""
    kind: str
    message: str
