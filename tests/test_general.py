"""Unit tests for the model dispatcher."""

import pytest

from quantaqueue import general, mg1, mm1, mm1k, mms, mmsk
from quantaqueue.errors import DomainError, InvalidModelError
from quantaqueue.general import ModelResult, QueueModel
from quantaqueue.params import QueueParams


def test_busy_servers_not_applicable_to_single_server_models():
    for model in (1, 5):
        outcome = general.qty_server_busy(model, 0.5, 0.2, 2, 3, 5)
        assert outcome.result is None
        assert "does not quantify the occupied servers" in outcome.message
    assert general.qty_server_busy(1, 0.5, 2).message == "The M/M/1 model does not quantify the occupied servers."


def test_busy_servers_for_multi_server_model():
    outcome = general.qty_server_busy(2, 0.5, 0.2, 2, 3, 5)
    assert outcome.result == pytest.approx(3.9063)
    assert outcome.message == "Successful calculation for the M/M/s model."


def test_model_names():
    assert general.model_name(2) == ModelResult(2, "M/M/s model")
    names = [general.model_name(model).message for model in range(1, 6)]
    assert names == ["M/M/1 model", "M/M/s model", "M/M/1/k model", "M/M/s/k model", "M/G/1 model"]


@pytest.mark.parametrize("selector", [0, 6, -1, 2.5, "two"])
def test_invalid_model_selector(selector):
    with pytest.raises(InvalidModelError, match="between 1 and 5"):
        general.model_name(selector)
    with pytest.raises(InvalidModelError):
        general.initial_probability(selector, 1, 2)


def test_invalid_model_is_a_value_error():
    with pytest.raises(ValueError):
        general.system_time_expected(9, 1, 2)


def test_dispatch_matches_model_functions():
    assert general.initial_probability(1, 0.5, 2).result == mm1.initial_probability(0.5, 2)
    assert general.initial_probability(2, 2, 1, 3).result == mms.initial_probability(2, 1, 3)
    assert general.initial_probability(3, 1, 2, limit=3).result == mm1k.initial_probability(1, 2, 3)
    assert general.initial_probability(4, 1, 1, 2, 4).result == mmsk.initial_probability(1, 1, 2, 4)
    assert general.initial_probability(5, 1, 2).result == mg1.initial_probability(1, 2)

    assert general.n_probability(2, 2, 1, 3, 4).result == mms.n_probability(2, 1, 3, 4)
    assert general.n_probability(4, 1, 1, 2, 3, 4).result == mmsk.n_probability(1, 1, 2, 3, 4)
    assert general.queue_clients_expected(5, 1, 2, variance=0.5).result == mg1.queue_clients_expected(1, 2, 0.5)
    assert general.system_clients_expected(3, 1, 2, limit=3).result == mm1k.system_clients_expected(1, 2, 3)
    assert general.queue_time_expected(4, 1, 1, 2, limit=4).result == mmsk.queue_time_expected(1, 1, 2, 4)
    assert general.system_time_expected(2, 2, 1, 3).result == mms.system_time_expected(2, 1, 3)


def test_success_messages_name_the_model():
    assert general.queue_clients_expected(3, 1, 2, limit=3).message == "Successful calculation for the M/M/1/k model."
    assert general.system_time_expected(QueueModel.MG1, 1, 2).message == (
        "Successful calculation for the M/G/1 model."
    )


def test_dispatcher_decimals_are_honoured():
    assert general.system_clients_expected(1, 0.5, 2, decimals=2).result == 0.33


def test_model_errors_propagate():
    with pytest.raises(DomainError, match="'mu'"):
        general.initial_probability(1, 1, 0)
    with pytest.raises(DomainError):
        general.initial_probability(3, 2, 2, limit=3)


def test_evaluate_model_collects_every_metric():
    results = general.evaluate_model(1, QueueParams(lam=0.5, mu=2))
    assert list(results) == [
        "initial_probability",
        "n_probability",
        "qty_server_busy",
        "queue_clients_expected",
        "system_clients_expected",
        "queue_time_expected",
        "system_time_expected",
    ]
    assert results["initial_probability"].result == 0.75
    assert results["qty_server_busy"].result is None
    assert results["system_time_expected"].result == 0.6667


def test_bool_is_not_a_model_selector():
    for selector in (True, False):
        with pytest.raises(InvalidModelError):
            general.model_name(selector)
        with pytest.raises(InvalidModelError):
            general.initial_probability(selector, 0.5, 2)


def test_missing_metric_uses_generic_message():
    outcome = general._dispatch(1, {})
    assert outcome == ModelResult(None, "The M/M/1 model does not define this metric.")
