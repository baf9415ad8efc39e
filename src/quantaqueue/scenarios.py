"""Pre-defined parameter sets with varying traffic intensities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from .params import QueueParams


@dataclass(frozen=True)
class Scenario:
    name: str
    model: int
    params: QueueParams


SCENARIOS: Dict[str, Scenario] = {
    "A": Scenario(name="A", model=1, params=QueueParams(lam=0.6, mu=1.0)),  # ρ ≈ 0.60
    "B": Scenario(name="B", model=2, params=QueueParams(lam=2.55, mu=1.0, server_size=3)),  # ρ ≈ 0.85
    "C": Scenario(name="C", model=3, params=QueueParams(lam=0.95, mu=1.0, limit=10)),  # ρ ≈ 0.95
    "D": Scenario(name="D", model=4, params=QueueParams(lam=3.0, mu=1.0, server_size=2, limit=6)),  # ρ = 1.50
}


def list_scenarios() -> Iterable[str]:
    """Return available scenario identifiers."""
    return sorted(SCENARIOS.keys())


def get_scenario(name: str) -> Scenario:
    key = name.upper()
    if key not in SCENARIOS:
        raise KeyError(f"Scenario '{name}' is not defined. Available: {list_scenarios()}")
    return SCENARIOS[key]


def get_params(name: str) -> QueueParams:
    """Return the `QueueParams` of a named scenario."""
    return get_scenario(name).params
