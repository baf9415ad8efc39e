"""Error taxonomy shared by every formula in the package."""

from __future__ import annotations


class QueueingError(ValueError):
    """Base class for invalid inputs to a queueing formula."""


class DomainError(QueueingError):
    """A parameter is mathematically invalid for the formula (mu = 0, rho = 1, ...)."""


class RangeError(QueueingError):
    """An index parameter violates an ordering constraint (n < 0, k < s + 1, ...)."""


class EvaluationError(QueueingError):
    """An expression could not be evaluated or rounded."""


class InvalidModelError(QueueingError):
    """The model selector is outside the supported range."""
