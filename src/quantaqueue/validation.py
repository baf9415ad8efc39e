"""Precondition checks reused by the formula modules."""

from __future__ import annotations

from .errors import DomainError, RangeError


def require_mu(mu: float) -> None:
    if mu == 0:
        raise DomainError("The parameter 'mu' cannot be equal to zero (0).")


def require_server_size(server_size: int) -> None:
    if server_size <= 0:
        raise DomainError(
            "The parameter 'serverSize' cannot be equal to zero (0) or minor to one (serverSize < 1)."
        )
    if server_size != int(server_size):
        raise DomainError("The parameter 'serverSize' must be an integer.")


def require_limit(limit: int, minimum: int = 1) -> None:
    """Validate a capacity; below one is a domain error, below a larger floor is a range error."""
    if limit < 1:
        raise DomainError("The parameter 'limit' cannot be lower than one (1).")
    if limit < minimum:
        raise RangeError(f"The parameter 'limit' cannot be lower than {minimum}.")


def require_iteration(iteration: int, minimum: int = 0) -> None:
    if iteration < minimum:
        raise RangeError(f"The parameter 'iteration' cannot be lower than {minimum}.")
    if iteration != int(iteration):
        raise RangeError("The parameter 'iteration' must be an integer.")


def require_nonzero(value: float, name: str) -> None:
    if value == 0:
        raise DomainError(f"The quantity '{name}' cannot be equal to zero (0).")
