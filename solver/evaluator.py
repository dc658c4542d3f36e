# file: solver/evaluator.py
"""
Fixed-step evaluator for coupled ODE systems (explicit Euler).

Features
--------
- Named state variables with one update rule per variable.
- Simultaneous update: every rule reads the same pre-step snapshot and the
  new values are committed together once all rules have been computed.
- Append-only history of post-step snapshots, plus the simulated time of each.
- Generator loop (`iter_steps`) so callers can stop a long integration early.

Notes
-----
- Update rules are plain callables `rule(snapshot) -> float`. They usually close
  over fixed rates and the step size, e.g.
      lambda s: s["S"] + (-beta * s["S"] * s["I"] / n) * dt
- `evaluate` keeps the float cursor loop (`cursor <= time_end`, `cursor += dt`),
  so the number of recorded steps can differ by one near the boundary. Use
  `evaluate_steps` for an exact step count.
- This module has no third-party dependencies so it can be unit-tested alone.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Callable, Dict, Iterator, List, Tuple

from .errors import DatasetNotFoundError, InvalidTimeRangeError, UnknownVariableError


VariablesContext = Dict[str, float]


class Snapshot(Mapping):
    """
    Read-only view of the full state at one instant.

    Reading a name that is not part of the state raises UnknownVariableError
    instead of a bare KeyError, so a typo in an update rule is reported by name.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping) -> None:
        self._data: VariablesContext = dict(data)

    def __getitem__(self, name: str) -> float:
        try:
            return self._data[name]
        except KeyError:
            raise UnknownVariableError(name, operation="lookup") from None

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Snapshot({self._data!r})"


UpdateFunction = Callable[[Snapshot], float]


class Evaluator:
    """
    Holds the current state, the update rules and the recorded history.

    Public attributes:
        variables: Dict[str, float]          # current state
        functions: Dict[str, UpdateFunction] # one rule per variable
        history:   List[Dict[str, float]]    # one snapshot per completed step
        times:     List[float]               # simulated time after each step

    With `strict=False` (default) a rule whose variable has no start value is
    skipped. With `strict=True` stepping raises UnknownVariableError instead.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self.variables: VariablesContext = {}
        self.functions: Dict[str, UpdateFunction] = {}
        self.history: List[VariablesContext] = []
        self.times: List[float] = []

    # -------------------------
    # Setup
    # -------------------------
    def add_start_value(self, name: str, value: float) -> None:
        self.variables[name] = float(value)

    def add_function(self, name: str, function: UpdateFunction) -> None:
        self.functions[name] = function

    def unbound_functions(self) -> List[str]:
        """Names with an update rule but no start value."""
        return [name for name in self.functions if name not in self.variables]

    # -------------------------
    # Stepping
    # -------------------------
    def next_step(self) -> None:
        """Advance the state by one step. Does not record history."""
        copy = Snapshot(self.variables)
        updated: VariablesContext = {}
        for name, function in self.functions.items():
            if name not in self.variables:
                if self.strict:
                    raise UnknownVariableError(name, operation="next_step (no start value)")
                continue
            try:
                updated[name] = float(function(copy))
            except UnknownVariableError as e:
                raise UnknownVariableError(e.name, operation="next_step", target=name) from None
        # commit only once every rule has succeeded
        self.variables.update(updated)

    def iter_steps(
        self, time_begin: float, time_end: float, time_delta: float
    ) -> Iterator[Tuple[float, Snapshot]]:
        """
        Run the time loop lazily, yielding (time, snapshot) after each recorded step.

        Breaking out of the loop stops the integration; steps already yielded
        stay in `history`. The time range is checked here, before iteration starts.
        """
        _check_time_range(time_begin, time_end, time_delta)
        return self._steps(time_begin, time_end, time_delta)

    def _steps(self, time_begin: float, time_end: float, time_delta: float) -> Iterator[Tuple[float, Snapshot]]:
        cursor = time_begin
        while cursor <= time_end:
            self.next_step()
            cursor += time_delta
            self._record(cursor)
            yield cursor, Snapshot(self.variables)

    def evaluate(self, time_begin: float, time_end: float, time_delta: float) -> None:
        """Step from time_begin while the cursor is <= time_end, recording each step."""
        for _ in self.iter_steps(time_begin, time_end, time_delta):
            pass

    def evaluate_steps(self, n_steps: int, time_delta: float = 1.0, time_begin: float = 0.0) -> None:
        """Record exactly `n_steps` steps; the cursor is begin + k * delta."""
        if isinstance(n_steps, bool) or int(n_steps) != n_steps or n_steps < 0:
            raise ValueError(f"n_steps must be a non-negative integer, got {n_steps!r}")
        n_steps = int(n_steps)
        _check_time_range(time_begin, time_begin, time_delta)
        for k in range(1, n_steps + 1):
            self.next_step()
            self._record(time_begin + k * time_delta)

    def _record(self, time: float) -> None:
        self.history.append(dict(self.variables))
        self.times.append(time)

    # -------------------------
    # Queries
    # -------------------------
    @property
    def latest(self) -> Snapshot:
        return Snapshot(self.variables)

    @property
    def step_count(self) -> int:
        return len(self.history)

    def get_data_vec(self, dataset_name: str) -> List[float]:
        """
        Values of one variable across all recorded steps, oldest first.

        Raises DatasetNotFoundError if any snapshot lacks the name. With an
        empty history a registered variable gives an empty list.
        """
        if not self.history and dataset_name not in self.variables:
            raise DatasetNotFoundError(dataset_name)
        missing = [idx for idx, snap in enumerate(self.history) if dataset_name not in snap]
        if missing:
            never = len(missing) == len(self.history) and dataset_name not in self.variables
            raise DatasetNotFoundError(dataset_name, missing_at=None if never else missing[0])
        return [snap[dataset_name] for snap in self.history]

    def __repr__(self) -> str:
        return (f"Evaluator(variables={sorted(self.variables)}, functions={sorted(self.functions)}, "
                f"steps={len(self.history)})")


def _check_time_range(time_begin: float, time_end: float, time_delta: float) -> None:
    if not (math.isfinite(time_begin) and math.isfinite(time_end)):
        raise InvalidTimeRangeError(time_begin, time_end, time_delta, "bounds must be finite")
    if not math.isfinite(time_delta) or time_delta <= 0:
        raise InvalidTimeRangeError(time_begin, time_end, time_delta, "delta must be positive")
    if time_end < time_begin:
        raise InvalidTimeRangeError(time_begin, time_end, time_delta, "end must not precede begin")
