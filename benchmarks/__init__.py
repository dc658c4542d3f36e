# file: benchmarks/__init__.py
"""
Scenario presets for SIRS runs.
See: benchmarks/scenarios.py
"""
from .scenarios import build_model, build_params, build_time_range, SCENARIOS

__all__ = ["build_model", "build_params", "build_time_range", "SCENARIOS"]
