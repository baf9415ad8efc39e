"""Validated parameter bundle for one queueing system."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from .errors import DomainError, RangeError


@dataclass(frozen=True)
class QueueParams:
    """Rates and sizes bundled for convenience."""

    lam: float
    mu: float
    server_size: int = 1
    limit: int = 1
    variance: float = 0.0

    def __post_init__(self) -> None:
        if self.lam < 0:
            raise DomainError("Arrival rate lam must be non-negative.")
        if self.mu <= 0:
            raise DomainError("Service rate mu must be strictly positive.")
        if self.server_size < 1 or self.server_size != int(self.server_size):
            raise DomainError("Number of servers must be an integer >= 1.")
        if self.limit < 1 or self.limit != int(self.limit):
            raise RangeError("Capacity limit must be an integer >= 1.")
        if self.variance < 0:
            raise DomainError("Service variance must be non-negative.")

    @property
    def rho(self) -> float:
        return self.lam / (self.mu * self.server_size)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)
