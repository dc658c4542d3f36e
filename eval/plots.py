# file: eval/plots.py
from __future__ import annotations
"""
Quick diagnostic plots for SIRS runs.

This module intentionally keeps plotting minimal (matplotlib only).
All functions save PNGs into the provided output directory.

Functions
---------
quick_diagnostics(df, outdir)
  - all compartments over the step index (or time, when present)
  - infected curve with the peak marked
"""
from pathlib import Path
from typing import Optional

import pandas as pd
import matplotlib.pyplot as plt


def _ensure_dir(d: Path | str) -> Path:
    p = Path(d)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _savefig(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close()


def _x_axis(df: pd.DataFrame) -> str:
    return "time" if "time" in df.columns else "t"


def plot_compartments(df: pd.DataFrame, outdir: Path) -> Optional[Path]:
    cols = [c for c in df.columns if c not in ("t", "time")]
    if df.empty or not cols:
        return None
    p = outdir / "compartments.png"
    x = _x_axis(df)
    plt.figure(figsize=(9, 4))
    for c in cols:
        plt.plot(df[x], df[c], label=c)
    plt.title("Compartments")
    plt.xlabel(x)
    plt.ylabel("individuals")
    plt.legend()
    _savefig(p)
    return p


def plot_infected(df: pd.DataFrame, outdir: Path) -> Optional[Path]:
    if df.empty or "I" not in df:
        return None
    p = outdir / "infected.png"
    x = _x_axis(df)
    peak = df["I"].idxmax()
    plt.figure(figsize=(9, 3))
    plt.plot(df[x], df["I"], color="tab:red")
    plt.axvline(df.loc[peak, x], linestyle="--", alpha=0.6)
    plt.title(f"Infected (peak {df.loc[peak, 'I']:.1f})")
    plt.xlabel(x)
    plt.ylabel("I")
    _savefig(p)
    return p


def quick_diagnostics(df: pd.DataFrame, outdir: Path | str) -> dict[str, str]:
    """
    Produce a minimal set of PNGs for quick inspection.

    Returns
    -------
    dict: mapping figure name -> path
    """
    outp = _ensure_dir(outdir)
    results: dict[str, str] = {}

    cp = plot_compartments(df, outp)
    if cp:
        results["compartments"] = str(cp)

    ip = plot_infected(df, outp)
    if ip:
        results["infected"] = str(ip)

    return results
