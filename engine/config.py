"""engine.config

Run configuration passed from UI / runner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from core.tuning import DEFAULT_TUNING, Tuning


@dataclass(frozen=True)
class EngineConfig:
    base_seed: int
    scenario_key: str = "bootstrapped"
    months: int = 60
    tuning: Tuning = field(default=DEFAULT_TUNING)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_seed": int(self.base_seed),
            "scenario_key": str(self.scenario_key),
            "months": int(self.months),
        }
