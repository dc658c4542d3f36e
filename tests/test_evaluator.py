# file: tests/test_evaluator.py
from __future__ import annotations

import math

import pytest

from solver import (
    DatasetNotFoundError,
    Evaluator,
    InvalidTimeRangeError,
    UnknownVariableError,
)


def _doubling() -> Evaluator:
    e = Evaluator()
    e.add_start_value("TEST", 1.0)
    e.add_function("TEST", lambda data: data["TEST"] * 2.0)
    return e


def test_single_step_doubles():
    e = _doubling()
    e.next_step()
    assert e.variables["TEST"] == 2.0
    # next_step alone never records
    assert e.history == []


def test_updates_read_the_pre_step_snapshot():
    for order in (("x", "y"), ("y", "x")):
        e = Evaluator()
        e.add_start_value("x", 1.0)
        e.add_start_value("y", 10.0)
        rules = {"x": lambda d: d["x"] * 2, "y": lambda d: d["x"] + d["y"]}
        for name in order:
            e.add_function(name, rules[name])
        e.next_step()
        assert e.variables["x"] == 2.0
        assert e.variables["y"] == 11.0  # old x, not 12


def test_next_step_is_deterministic():
    a, b = _doubling(), _doubling()
    a.add_start_value("k", 3.0)
    b.add_start_value("k", 3.0)
    a.add_function("k", lambda d: d["k"] - d["TEST"])
    b.add_function("k", lambda d: d["k"] - d["TEST"])
    for _ in range(2):
        a.next_step()
        b.next_step()
    assert a.variables == b.variables == {"TEST": 4.0, "k": 0.0}


def test_history_length_and_times():
    e = _doubling()
    e.evaluate(0.0, 1.0, 0.5)
    assert len(e.history) == 3
    assert e.get_data_vec("TEST") == [2.0, 4.0, 8.0]
    assert e.times == [0.5, 1.0, 1.5]
    # history entries are copies, not views of the live state
    e.next_step()
    assert e.history[-1]["TEST"] == 8.0


def test_history_starts_after_first_step():
    e = _doubling()
    e.evaluate(0.0, 0.0, 1.0)
    assert e.history == [{"TEST": 2.0}]


def test_evaluate_steps_exact_count():
    e = _doubling()
    e.evaluate_steps(4, time_delta=0.25)
    assert e.step_count == 4
    assert e.times == [0.25, 0.5, 0.75, 1.0]
    assert e.latest["TEST"] == 16.0


def test_iter_steps_can_stop_early():
    e = _doubling()
    for t, snap in e.iter_steps(0.0, 100.0, 1.0):
        if snap["TEST"] >= 8.0:
            break
    assert e.step_count == 3
    assert t == 3.0


@pytest.mark.parametrize(
    "begin,end,delta",
    [
        (0.0, 1.0, 0.0), (0.0, 1.0, -0.1), (0.0, 1.0, math.nan), (2.0, 1.0, 0.1),
        (-math.inf, 0.0, 1.0), (0.0, math.inf, 1.0), (0.0, math.nan, 0.1), (0.0, 1.0, math.inf),
    ],
)
def test_degenerate_time_range_rejected(begin, end, delta):
    e = _doubling()
    with pytest.raises(InvalidTimeRangeError):
        e.evaluate(begin, end, delta)
    with pytest.raises(ValueError):
        e.iter_steps(begin, end, delta)
    assert e.history == []
    assert e.variables["TEST"] == 1.0


def test_function_without_start_value_is_skipped():
    e = _doubling()
    e.add_function("ghost", lambda d: 42.0)
    assert e.unbound_functions() == ["ghost"]
    e.next_step()
    assert "ghost" not in e.variables
    assert e.variables["TEST"] == 2.0


def test_strict_mode_rejects_function_without_start_value():
    e = Evaluator(strict=True)
    e.add_start_value("a", 1.0)
    e.add_function("a", lambda d: d["a"] + 1)
    e.add_function("ghost", lambda d: 42.0)
    with pytest.raises(UnknownVariableError) as info:
        e.next_step()
    assert info.value.name == "ghost"
    assert e.variables == {"a": 1.0}


def test_late_registration_takes_effect_next_step():
    e = Evaluator(strict=True)
    e.add_function("a", lambda d: d["a"] + 1)
    e.add_start_value("a", 0.0)
    e.evaluate_steps(2)
    e.add_start_value("b", 5.0)
    e.add_function("b", lambda d: d["b"] + d["a"])
    e.evaluate_steps(1, time_begin=2.0)
    assert e.history[-1] == {"a": 3.0, "b": 7.0}


def test_unknown_variable_read_fails_step_and_keeps_history():
    e = _doubling()
    e.evaluate(0.0, 1.0, 0.5)
    before = dict(e.variables)
    e.add_start_value("y", 0.0)
    e.add_function("y", lambda d: d["typo"] + 1)
    with pytest.raises(UnknownVariableError) as info:
        e.evaluate(0.0, 1.0, 0.5)
    err = info.value
    assert isinstance(err, KeyError)
    assert err.name == "typo" and err.target == "y"
    assert "typo" in str(err) and "'y'" in str(err)
    assert len(e.history) == 3
    assert e.variables == dict(before, y=0.0)


def test_missing_dataset_is_recoverable():
    e = _doubling()
    e.evaluate(0.0, 1.0, 0.5)
    with pytest.raises(DatasetNotFoundError) as info:
        e.get_data_vec("NOPE")
    assert info.value.name == "NOPE"
    assert info.value.missing_at is None
    # evaluator still works afterwards
    assert len(e.get_data_vec("TEST")) == 3


def test_dataset_added_mid_run_is_incomplete():
    e = _doubling()
    e.evaluate_steps(2)
    e.add_start_value("late", 1.0)
    e.evaluate_steps(1)
    with pytest.raises(DatasetNotFoundError) as info:
        e.get_data_vec("late")
    assert info.value.missing_at == 0


def test_empty_history_gives_empty_series():
    e = _doubling()
    assert e.get_data_vec("TEST") == []
    with pytest.raises(KeyError):
        e.get_data_vec("NOPE")


def test_snapshot_is_read_only():
    e = _doubling()
    snap = e.latest
    with pytest.raises(TypeError):
        snap["TEST"] = 5.0  # type: ignore[index]
    assert dict(snap) == {"TEST": 1.0}


def test_evaluate_steps_requires_whole_count():
    e = _doubling()
    for bad in (2.5, -1, True):
        with pytest.raises(ValueError):
            e.evaluate_steps(bad)
    assert e.history == []
    e.evaluate_steps(2.0)
    assert e.step_count == 2


def test_lookup_outside_step_is_not_reported_as_step():
    e = _doubling()
    with pytest.raises(UnknownVariableError) as info:
        e.latest["missing"]
    assert info.value.operation == "lookup"
    assert info.value.target is None
    assert "next_step" not in str(info.value)
