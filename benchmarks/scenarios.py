# file: benchmarks/scenarios.py
from __future__ import annotations
"""
Scenario factory for SIRS runs.

Usage
-----
from benchmarks.scenarios import build_model, build_time_range
model = build_model(scenario="default")
tr = build_time_range(scenario="default", overrides=dict(t_end=100.0))

Scenarios
---------
default:
  - S0=990, I0=10, R0=0 (N=1000)
  - infection_rate=0.3, recovery_rate=0.1, imm_off_rate=0.05
  - t in [0, 50], dt=0.1

sir:
  - same as default but imm_off_rate=0 (recovered stay immune)

custom:
  - no presets; every parameter must come from overrides.
"""
from typing import Any, Dict, Optional

from models.sirs import SIRSModel, SIRSParams, TimeRange


SCENARIOS: Dict[str, Dict[str, Dict[str, float]]] = {
    "default": {
        "params": dict(s_zero=990.0, i_zero=10.0, r_zero=0.0,
                       infection_rate=0.3, recovery_rate=0.1, imm_off_rate=0.05),
        "time": dict(t_start=0.0, t_end=50.0, t_delta=0.1),
    },
    "sir": {
        "params": dict(s_zero=990.0, i_zero=10.0, r_zero=0.0,
                       infection_rate=0.3, recovery_rate=0.1, imm_off_rate=0.0),
        "time": dict(t_start=0.0, t_end=50.0, t_delta=0.1),
    },
    "custom": {"params": {}, "time": {}},
}


# short CLI names -> field names, so an override always replaces its preset
ALIASES = {"s_rate": "imm_off_rate", "i_rate": "infection_rate", "r_rate": "recovery_rate"}


def _merge(base: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in (overrides or {}).items():
        if v is not None:
            out[ALIASES.get(k, k)] = v
    return out


def _preset(scenario: str) -> Dict[str, Dict[str, float]]:
    if scenario not in SCENARIOS:
        raise ValueError("scenario must be one of: " + " | ".join(SCENARIOS))
    return SCENARIOS[scenario]


def build_params(scenario: str = "default", overrides: Optional[Dict[str, Any]] = None) -> SIRSParams:
    """
    Validated SIRS parameters for a scenario.

    Parameters
    ----------
    scenario : {"default","sir","custom"}
    overrides : dict
        Field names or their short aliases (s_rate, i_rate, r_rate). None values are ignored.

    Raises
    ------
    ValueError for an unknown scenario; pydantic.ValidationError for missing
    or invalid parameters.
    """
    return SIRSParams.model_validate(_merge(_preset(scenario)["params"], overrides))


def build_model(scenario: str = "default", overrides: Optional[Dict[str, Any]] = None) -> SIRSModel:
    return SIRSModel(build_params(scenario, overrides))


def build_time_range(scenario: str = "default", overrides: Optional[Dict[str, Any]] = None) -> TimeRange:
    return TimeRange.model_validate(_merge(_preset(scenario)["time"], overrides))
