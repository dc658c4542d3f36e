# file: solver/errors.py
"""
Exceptions raised by the step evaluator.

All errors identify the offending variable (when there is one) and the
operation that was running, so callers can report them without extra context.
"""
from __future__ import annotations

from typing import Optional


class EvaluatorError(Exception):
    """Base class for evaluator failures."""


class UnknownVariableError(EvaluatorError, KeyError):
    """An update rule referenced a variable that has no value in the snapshot."""

    def __init__(self, name: str, operation: str = "lookup", target: Optional[str] = None) -> None:
        self.name = name
        self.operation = operation
        self.target = target
        super().__init__(name)

    def __str__(self) -> str:
        where = f" while updating '{self.target}'" if self.target is not None else ""
        return f"unknown variable '{self.name}' during {self.operation}{where}"


class DatasetNotFoundError(EvaluatorError, KeyError):
    """Requested series is not present in every recorded snapshot."""

    def __init__(self, name: str, missing_at: Optional[int] = None) -> None:
        self.name = name
        self.missing_at = missing_at
        super().__init__(name)

    def __str__(self) -> str:
        if self.missing_at is None:
            return f"dataset '{self.name}' not found (never registered)"
        return f"dataset '{self.name}' not found (missing from step {self.missing_at})"


class InvalidTimeRangeError(EvaluatorError, ValueError):
    """Time range that would loop forever or never run."""

    def __init__(self, time_begin: float, time_end: float, time_delta: float, reason: str) -> None:
        self.time_begin = time_begin
        self.time_end = time_end
        self.time_delta = time_delta
        super().__init__(
            f"invalid time range for evaluate: begin={time_begin}, end={time_end}, "
            f"delta={time_delta} ({reason})"
        )
