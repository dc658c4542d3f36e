# file: models/__init__.py
"""
Models package: compartment model interface and the SIRS model.
"""
from .base import CompartmentModel
from .sirs import SIRSModel, SIRSParams, TimeRange

__all__ = [
    "CompartmentModel",
    "SIRSModel",
    "SIRSParams",
    "TimeRange",
]
