# file: eval/__init__.py
"""
Evaluation helpers: run metrics and quick plots.
"""
from .metrics import compute_basic_metrics, conservation_drift
from .plots import quick_diagnostics

__all__ = ["compute_basic_metrics", "conservation_drift", "quick_diagnostics"]
