# file: orchestration/simulator.py
"""
Run loop that ties a compartment model to the Euler evaluator and exports results.

Responsibilities
----------------
- Build a fresh Evaluator from a model and the run's step size.
- Integrate over the configured time range.
- Export the recorded history as a DataFrame / CSV-style text table.

Design notes
------------
- The exported `t` column is the 0-based step counter, not simulated time.
  Pass with_time=True to also get the simulated time of each row.
- History is kept in memory for the whole run (O(steps x compartments)).
  For very long ranges use `iter_run` and stop early, or pick a larger dt.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from models.base import CompartmentModel
from models.sirs import TimeRange
from solver import Evaluator, Snapshot


class Simulator:
    """
    Orchestrates one model over one time range.

    Public attributes (filled after run):
        evaluator: Evaluator   # holds history and times
    """

    def __init__(
        self,
        model: CompartmentModel,
        time_range: TimeRange,
        strict: bool = True,
    ) -> None:
        self.model = model
        self.time_range = time_range
        self.strict = strict
        self.evaluator: Evaluator = model.build_evaluator(time_range.t_delta, strict=strict)

    @property
    def columns(self) -> List[str]:
        return list(self.model.compartments)

    # -------------------------
    # Run loop
    # -------------------------
    def run(self) -> Evaluator:
        """Integrate over the whole time range and return the evaluator."""
        tr = self.time_range
        self.evaluator.evaluate(tr.t_start, tr.t_end, tr.t_delta)
        return self.evaluator

    def iter_run(self) -> Iterator[Tuple[float, Snapshot]]:
        """Step-wise run; stop iterating to abort. Recorded steps are kept."""
        tr = self.time_range
        return self.evaluator.iter_steps(tr.t_start, tr.t_end, tr.t_delta)

    # -------------------------
    # Export helpers
    # -------------------------
    def to_dataframe(self, with_time: bool = False, names: Optional[List[str]] = None):
        """Return the history as a pandas DataFrame: t[, time], then one column per variable."""
        import pandas as pd

        names = names or self.columns
        data = {"t": list(range(self.evaluator.step_count))}
        if with_time:
            data["time"] = list(self.evaluator.times)
        for name in names:
            data[name] = self.evaluator.get_data_vec(name)
        return pd.DataFrame(data, columns=list(data.keys()))


def render_csv(df) -> str:
    """
    Format a result table the way the solver prints it:

        t,S,I,R
        0, 989.7, 10.2, 0.1
    """
    lines = [",".join(str(c) for c in df.columns)]
    for row in df.itertuples(index=False):
        lines.append(", ".join(str(v) for v in row))
    return "\n".join(lines) + "\n"
