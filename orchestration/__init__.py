# file: orchestration/__init__.py
"""
Orchestration layer: simulation run loop and result export.
"""
from .simulator import Simulator, render_csv

__all__ = ["Simulator", "render_csv"]
