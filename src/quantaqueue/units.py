"""Time units accepted by :func:`quantaqueue.basic.convert`."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Tuple, Union


@dataclass(frozen=True)
class TimeUnit:
    """A named time unit and its length in seconds."""

    id: int
    text: str
    value: float

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


# Ordered from the smallest unit to the largest; months are four weeks long.
TIME_UNITS: Tuple[TimeUnit, ...] = (
    TimeUnit(id=1, text="Nanosecond", value=0.000000001),
    TimeUnit(id=2, text="Microsecond", value=0.000001),
    TimeUnit(id=3, text="Millisecond", value=0.001),
    TimeUnit(id=4, text="Centisecond", value=0.01),
    TimeUnit(id=5, text="Decisecond", value=0.1),
    TimeUnit(id=6, text="Second", value=1),
    TimeUnit(id=7, text="Minute", value=60),
    TimeUnit(id=8, text="Hour", value=3600),
    TimeUnit(id=9, text="Day", value=86400),
    TimeUnit(id=10, text="Week", value=604800),
    TimeUnit(id=11, text="Month", value=2419200),
    TimeUnit(id=12, text="Year", value=29030400),
    TimeUnit(id=13, text="Lustrum", value=145152000),
    TimeUnit(id=14, text="Decade", value=725760000),
    TimeUnit(id=15, text="Century", value=7257600000),
    TimeUnit(id=16, text="Millennium", value=72576000000),
)


def get_unit(key: Union[int, str]) -> TimeUnit:
    """Look a unit up by id or by (case-insensitive) name."""
    for unit in TIME_UNITS:
        if isinstance(key, str):
            if unit.text.lower() == key.lower():
                return unit
        elif unit.id == key:
            return unit
    names = ", ".join(unit.text for unit in TIME_UNITS)
    raise KeyError(f"Time unit '{key}' is not defined. Available: {names}")
