"""Unit tests for the time-unit table."""

import pytest

from quantaqueue.units import TIME_UNITS, get_unit


def test_table_is_ordered():
    assert [unit.id for unit in TIME_UNITS] == list(range(1, 17))
    values = [unit.value for unit in TIME_UNITS]
    assert values == sorted(values)
    assert TIME_UNITS[0].value == 1e-9
    assert TIME_UNITS[-1].value == 72576000000


def test_lookup_by_id_and_name():
    assert get_unit(7).text == "Minute"
    assert get_unit("hour").value == 3600


def test_unknown_unit():
    with pytest.raises(KeyError):
        get_unit("Fortnight")
