"""
Model dispatcher: route a model selector to the per-model formula.

Selectors follow the historical numbering 1..5 (see :class:`QueueModel`).
Every dispatcher call returns a :class:`ModelResult`. ``result`` is ``None``
only when the metric does not apply to the selected model; formula errors
propagate to the caller unchanged.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Callable, Dict, Mapping, Optional, Union

from . import mg1, mm1, mm1k, mms, mmsk
from .errors import InvalidModelError
from .kernel import DEFAULT_DECIMALS
from .params import QueueParams


class QueueModel(IntEnum):
    MM1 = 1
    MMS = 2
    MM1K = 3
    MMSK = 4
    MG1 = 5

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    QueueModel.MM1: "M/M/1",
    QueueModel.MMS: "M/M/s",
    QueueModel.MM1K: "M/M/1/k",
    QueueModel.MMSK: "M/M/s/k",
    QueueModel.MG1: "M/G/1",
}

ModelSelector = Union[int, QueueModel]


@dataclass(frozen=True)
class ModelResult:
    """Uniform envelope returned by the dispatcher."""

    result: Optional[float]
    message: str

    def as_dict(self) -> Mapping[str, object]:
        return asdict(self)


def select_model(model: ModelSelector) -> QueueModel:
    """Validate a selector and return the matching :class:`QueueModel`."""
    if isinstance(model, bool):
        raise InvalidModelError("The parameter 'model' must be between 1 and 5 (inclusive).")
    try:
        return QueueModel(model)
    except ValueError as exc:
        raise InvalidModelError("The parameter 'model' must be between 1 and 5 (inclusive).") from exc


def _dispatch(
    model: ModelSelector,
    table: Dict[QueueModel, Callable[[], float]],
    not_applicable: str = "The {label} model does not define this metric.",
) -> ModelResult:
    selected = select_model(model)
    compute = table.get(selected)
    if compute is None:
        return ModelResult(None, not_applicable.format(label=selected.label))
    return ModelResult(compute(), f"Successful calculation for the {selected.label} model.")


def qty_server_busy(
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    iteration: int = 1,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> ModelResult:
    """Busy-server state weight; not defined for M/M/1 and M/G/1."""
    return _dispatch(
        model,
        {
            QueueModel.MMS: lambda: mms.qty_server_busy(lam, mu, server_size, iteration, decimals),
            QueueModel.MM1K: lambda: mm1k.qty_server_busy(lam, mu, iteration, limit, decimals),
            QueueModel.MMSK: lambda: mmsk.qty_server_busy(lam, mu, server_size, iteration, limit, decimals),
        },
        not_applicable="The {label} model does not quantify the occupied servers.",
    )


def initial_probability(
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> ModelResult:
    return _dispatch(
        model,
        {
            QueueModel.MM1: lambda: mm1.initial_probability(lam, mu, decimals),
            QueueModel.MMS: lambda: mms.initial_probability(lam, mu, server_size, decimals),
            QueueModel.MM1K: lambda: mm1k.initial_probability(lam, mu, limit, decimals),
            QueueModel.MMSK: lambda: mmsk.initial_probability(lam, mu, server_size, limit, decimals),
            QueueModel.MG1: lambda: mg1.initial_probability(lam, mu, decimals),
        },
    )


def n_probability(
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    iteration: int = 1,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> ModelResult:
    return _dispatch(
        model,
        {
            QueueModel.MM1: lambda: mm1.n_probability(lam, mu, iteration, decimals),
            QueueModel.MMS: lambda: mms.n_probability(lam, mu, server_size, iteration, decimals),
            QueueModel.MM1K: lambda: mm1k.n_probability(lam, mu, iteration, limit, decimals),
            QueueModel.MMSK: lambda: mmsk.n_probability(lam, mu, server_size, iteration, limit, decimals),
            QueueModel.MG1: lambda: mg1.n_probability(lam, mu, iteration, decimals),
        },
    )


def queue_clients_expected(
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    variance: float = 0,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> ModelResult:
    """Lq for the selected model."""
    return _dispatch(
        model,
        {
            QueueModel.MM1: lambda: mm1.queue_clients_expected(lam, mu, decimals),
            QueueModel.MMS: lambda: mms.queue_clients_expected(lam, mu, server_size, decimals),
            QueueModel.MM1K: lambda: mm1k.queue_clients_expected(lam, mu, limit, decimals),
            QueueModel.MMSK: lambda: mmsk.queue_clients_expected(lam, mu, server_size, limit, decimals),
            QueueModel.MG1: lambda: mg1.queue_clients_expected(lam, mu, variance, decimals),
        },
    )


def system_clients_expected(
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    variance: float = 0,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> ModelResult:
    """Ls for the selected model."""
    return _dispatch(
        model,
        {
            QueueModel.MM1: lambda: mm1.system_clients_expected(lam, mu, decimals),
            QueueModel.MMS: lambda: mms.system_clients_expected(lam, mu, server_size, decimals),
            QueueModel.MM1K: lambda: mm1k.system_clients_expected(lam, mu, limit, decimals),
            QueueModel.MMSK: lambda: mmsk.system_clients_expected(lam, mu, server_size, limit, decimals),
            QueueModel.MG1: lambda: mg1.system_clients_expected(lam, mu, variance, decimals),
        },
    )


def queue_time_expected(
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    variance: float = 0,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> ModelResult:
    """Wq for the selected model."""
    return _dispatch(
        model,
        {
            QueueModel.MM1: lambda: mm1.queue_time_expected(lam, mu, decimals),
            QueueModel.MMS: lambda: mms.queue_time_expected(lam, mu, server_size, decimals),
            QueueModel.MM1K: lambda: mm1k.queue_time_expected(lam, mu, limit, decimals),
            QueueModel.MMSK: lambda: mmsk.queue_time_expected(lam, mu, server_size, limit, decimals),
            QueueModel.MG1: lambda: mg1.queue_time_expected(lam, mu, variance, decimals),
        },
    )


def system_time_expected(
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    variance: float = 0,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> ModelResult:
    """Ws for the selected model."""
    return _dispatch(
        model,
        {
            QueueModel.MM1: lambda: mm1.system_time_expected(lam, mu, decimals),
            QueueModel.MMS: lambda: mms.system_time_expected(lam, mu, server_size, decimals),
            QueueModel.MM1K: lambda: mm1k.system_time_expected(lam, mu, limit, decimals),
            QueueModel.MMSK: lambda: mmsk.system_time_expected(lam, mu, server_size, limit, decimals),
            QueueModel.MG1: lambda: mg1.system_time_expected(lam, mu, variance, decimals),
        },
    )


def model_name(model: ModelSelector) -> ModelResult:
    """Return the selector as ``result`` and the Kendall name as ``message``."""
    selected = select_model(model)
    return ModelResult(int(selected), f"{selected.label} model")


def evaluate_model(
    model: ModelSelector,
    params: QueueParams,
    iteration: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> Dict[str, ModelResult]:
    """Run every dispatcher metric for one model and parameter set."""
    p = params
    return {
        "initial_probability": initial_probability(model, p.lam, p.mu, p.server_size, p.limit, decimals),
        "n_probability": n_probability(model, p.lam, p.mu, p.server_size, iteration, p.limit, decimals),
        "qty_server_busy": qty_server_busy(model, p.lam, p.mu, p.server_size, iteration, p.limit, decimals),
        "queue_clients_expected": queue_clients_expected(
            model, p.lam, p.mu, p.server_size, p.variance, p.limit, decimals
        ),
        "system_clients_expected": system_clients_expected(
            model, p.lam, p.mu, p.server_size, p.variance, p.limit, decimals
        ),
        "queue_time_expected": queue_time_expected(model, p.lam, p.mu, p.server_size, p.variance, p.limit, decimals),
        "system_time_expected": system_time_expected(
            model, p.lam, p.mu, p.server_size, p.variance, p.limit, decimals
        ),
    }
