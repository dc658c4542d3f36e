# file: models/sirs.py
"""
SIRS epidemic model (Susceptible -> Infected -> Recovered -> Susceptible).

Equations (explicit Euler, step dt, N = S0 + I0 + R0 fixed at setup)
---------------------------------------------------------------------
  S' = S + (-beta * S * I / N + xi * R) * dt
  I' = I + ( beta * S * I / N - gamma * I) * dt
  R' = R + ( gamma * I - xi * R) * dt

beta  = infection_rate
gamma = recovery_rate
xi    = imm_off_rate (loss of immunity; 0 gives plain SIR)

The three flows cancel pairwise, so S + I + R stays equal to N up to rounding.

Parameter schemas are pydantic models: a missing rate or initial value fails
validation before any evaluator exists.
"""
from __future__ import annotations

from typing import Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from solver import Snapshot, UpdateFunction
from .base import CompartmentModel


class SIRSParams(BaseModel):
    """
    Initial compartment sizes and rates.

    The short CLI names (s_zero, i_rate, ...) are accepted as aliases so a
    parameter file can use either spelling.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    s_zero: float = Field(..., ge=0.0, description="Susceptible at the beginning.")
    i_zero: float = Field(..., ge=0.0, description="Infected at the beginning.")
    r_zero: float = Field(..., ge=0.0, description="Recovered at the beginning.")
    infection_rate: float = Field(
        ..., ge=0.0, validation_alias=AliasChoices("infection_rate", "i_rate"),
        description="beta: contacts leading to infection per unit time.",
    )
    recovery_rate: float = Field(
        ..., ge=0.0, validation_alias=AliasChoices("recovery_rate", "r_rate"),
        description="gamma: fraction of infected recovering per unit time.",
    )
    imm_off_rate: float = Field(
        ..., ge=0.0, validation_alias=AliasChoices("imm_off_rate", "s_rate"),
        description="xi: fraction of recovered losing immunity per unit time.",
    )

    @property
    def population(self) -> float:
        return self.s_zero + self.i_zero + self.r_zero

    @model_validator(mode="after")
    def _positive_population(self) -> "SIRSParams":
        if self.population <= 0:
            raise ValueError("total population s_zero + i_zero + r_zero must be positive")
        return self


class TimeRange(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    t_start: float = Field(0.0, description="Begin of time.")
    t_end: float = Field(..., description="End of time.")
    t_delta: float = Field(0.01, gt=0.0, description="Delta time.")

    @model_validator(mode="after")
    def _ordered(self) -> "TimeRange":
        if self.t_end < self.t_start:
            raise ValueError("t_end must not be before t_start")
        return self


class SIRSModel(CompartmentModel):
    name = "sirs"

    def __init__(self, params: SIRSParams) -> None:
        self.params = params

    @property
    def compartments(self) -> List[str]:
        return ["S", "I", "R"]

    @property
    def population(self) -> float:
        return self.params.population

    def initial_values(self) -> Dict[str, float]:
        p = self.params
        return {"S": p.s_zero, "I": p.i_zero, "R": p.r_zero}

    def update_functions(self, time_delta: float) -> Dict[str, UpdateFunction]:
        beta = self.params.infection_rate
        gamma = self.params.recovery_rate
        xi = self.params.imm_off_rate
        n = self.population
        dt = float(time_delta)

        def s_func(data: Snapshot) -> float:
            return data["S"] + (-beta * data["S"] * data["I"] / n + xi * data["R"]) * dt

        def i_func(data: Snapshot) -> float:
            return data["I"] + (beta * data["S"] * data["I"] / n - gamma * data["I"]) * dt

        def r_func(data: Snapshot) -> float:
            return data["R"] + (gamma * data["I"] - xi * data["R"]) * dt

        return {"S": s_func, "I": i_func, "R": r_func}
