"""Startup simulation core: pure domain rules, no UI and no I/O."""

from .pmf import pivot
from .rng import RandomSource, seeded_source
from .state import Cohort, Employee, EmployeeSpec, GameState, create_state
from .tuning import DEFAULT_TUNING, Tuning

API_VERSION = "core-v2-cohorts-pmf"

__all__ = [
    "API_VERSION",
    "Cohort",
    "DEFAULT_TUNING",
    "Employee",
    "EmployeeSpec",
    "GameState",
    "RandomSource",
    "Tuning",
    "create_state",
    "pivot",
    "seeded_source",
]
