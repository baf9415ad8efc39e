"""Closed-form queueing theory formulas (M/M/1, M/M/s, M/M/1/k, M/M/s/k, M/G/1)."""

import logging

# Library code never configures handlers; applications do.
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

from . import mg1, mm1, mm1k, mms, mmsk
from .basic import PercentMode, convert, inverse, percent, rho, summation
from .cost import service_cost, total_cost, waiting_cost
from .errors import DomainError, EvaluationError, InvalidModelError, QueueingError, RangeError
from .general import (
    ModelResult,
    QueueModel,
    evaluate_model,
    initial_probability,
    model_name,
    n_probability,
    qty_server_busy,
    queue_clients_expected,
    queue_time_expected,
    system_clients_expected,
    system_time_expected,
)
from .kernel import DEFAULT_DECIMALS, INTERNAL_DECIMALS, evaluate
from .params import QueueParams
from .units import TIME_UNITS, TimeUnit, get_unit

__all__ = [
    "DEFAULT_DECIMALS",
    "INTERNAL_DECIMALS",
    "TIME_UNITS",
    "DomainError",
    "EvaluationError",
    "InvalidModelError",
    "ModelResult",
    "PercentMode",
    "QueueModel",
    "QueueParams",
    "QueueingError",
    "RangeError",
    "TimeUnit",
    "convert",
    "evaluate",
    "evaluate_model",
    "get_unit",
    "initial_probability",
    "inverse",
    "mg1",
    "mm1",
    "mm1k",
    "mms",
    "mmsk",
    "model_name",
    "n_probability",
    "percent",
    "qty_server_busy",
    "queue_clients_expected",
    "queue_time_expected",
    "rho",
    "service_cost",
    "summation",
    "system_clients_expected",
    "system_time_expected",
    "total_cost",
    "waiting_cost",
]
