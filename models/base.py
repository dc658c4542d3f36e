# file: models/base.py
"""
Compartment model interface.

A model knows:
  - the names of its compartments (the evaluator's variables),
  - their initial values,
  - one Euler update rule per compartment for a given step size.

`build_evaluator` wires all of that into a fresh `solver.Evaluator`, so the
simulator never has to know which model it is running.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List

from solver import Evaluator, UpdateFunction


class CompartmentModel(ABC):
    """
    Abstract compartment model.

    Lifecycle:
      - construct with validated parameters
      - build_evaluator(dt) -> Evaluator ready to step
    """

    name: str = "model"

    @property
    @abstractmethod
    def compartments(self) -> List[str]:
        """Compartment names in output column order."""
        raise NotImplementedError

    @abstractmethod
    def initial_values(self) -> Dict[str, float]:
        raise NotImplementedError

    @abstractmethod
    def update_functions(self, time_delta: float) -> Dict[str, UpdateFunction]:
        """Return one rule per compartment, closed over the rates and `time_delta`."""
        raise NotImplementedError

    def build_evaluator(self, time_delta: float, strict: bool = True) -> Evaluator:
        e = Evaluator(strict=strict)
        for key, value in self.initial_values().items():
            e.add_start_value(key, value)
        for key, func in self.update_functions(time_delta).items():
            e.add_function(key, func)
        return e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(compartments={self.compartments})"
