# file: solver/__init__.py
"""
Solver package: fixed-step Euler evaluator and its error types.
"""
__version__ = "0.2.0"

from .evaluator import (
    Evaluator,
    Snapshot,
    UpdateFunction,
    VariablesContext,
)
from .errors import (
    EvaluatorError,
    UnknownVariableError,
    DatasetNotFoundError,
    InvalidTimeRangeError,
)

__all__ = [
    "__version__",
    "Evaluator",
    "Snapshot",
    "UpdateFunction",
    "VariablesContext",
    "EvaluatorError",
    "UnknownVariableError",
    "DatasetNotFoundError",
    "InvalidTimeRangeError",
]
