# file: eval/metrics.py
from __future__ import annotations
"""
Basic metrics for compartment-model runs.

Inputs
------
- df: columns ["t", ("time",) "S", "I", "R"] as produced by Simulator.to_dataframe()

Outputs
-------
- compute_basic_metrics(...) -> dict with epidemic summary values.
- conservation_drift(...) -> per-row |S + I + R - N|.

Notes
-----
Conservation is not enforced by the solver; it emerges from the update rules.
The drift is the quickest check that a model's flows cancel.
"""
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd


COMPARTMENTS = ("S", "I", "R")


def _present(df: pd.DataFrame, compartments: Sequence[str]) -> list:
    return [c for c in compartments if c in df.columns]


def conservation_drift(
    df: pd.DataFrame,
    population: float,
    compartments: Sequence[str] = COMPARTMENTS,
) -> np.ndarray:
    cols = _present(df, compartments)
    if df.empty or not cols:
        return np.empty(0, dtype=float)
    total = df[cols].to_numpy(dtype=float).sum(axis=1)
    return np.abs(total - float(population))


def compute_basic_metrics(
    df: pd.DataFrame,
    population: Optional[float] = None,
    compartments: Sequence[str] = COMPARTMENTS,
) -> Dict[str, float]:
    """
    Summarise a run.

    Parameters
    ----------
    df : DataFrame from Simulator.to_dataframe()
    population : float, optional
        Total N. Defaults to the compartment sum of the first row.

    Returns
    -------
    dict with keys:
      - steps
      - peak_infected, peak_step (and peak_time when a time column exists)
      - final_<name> for each compartment
      - population, max_conservation_drift
    """
    out: Dict[str, float] = {"steps": int(len(df))}
    cols = _present(df, compartments)

    if df.empty or not cols:
        out["population"] = float("nan") if population is None else float(population)
        out["max_conservation_drift"] = float("nan")
        return out

    if "I" in df.columns:
        idx = int(np.argmax(df["I"].to_numpy(dtype=float)))
        out["peak_infected"] = float(df["I"].iloc[idx])
        out["peak_step"] = int(df["t"].iloc[idx]) if "t" in df.columns else idx
        if "time" in df.columns:
            out["peak_time"] = float(df["time"].iloc[idx])

    last = df.iloc[-1]
    for c in cols:
        out[f"final_{c}"] = float(last[c])

    if population is None:
        population = float(df[cols].iloc[0].sum())
    out["population"] = float(population)
    out["max_conservation_drift"] = float(conservation_drift(df, population, cols).max())
    return out
