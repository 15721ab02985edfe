"""engine.sim_runner

Headless runner for quick sanity checks and balancing sweeps.

Deterministic and CI-friendly: the only randomness is a seeded source, and
the "player" is a tiny built-in policy.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.market import get_user_count, is_market_open
from core.rng import seeded_source
from core.scenarios import get_scenario
from core.state import GameState, create_state

from .config import EngineConfig
from .logging import make_run_export
from .pipeline import TickEngine


@dataclass
class SimplePolicy:
    """Deterministic player for tests (no UI).

    Hires up to `target_team` developers while runway allows, turns on sales
    spend once launched, and pivots when the open market stops growing.
    """

    target_team: int = 4
    sales_spend: float = 5_000.0
    min_runway_months: float = 12.0
    pivot_after_stalled_months: int = 0   # 0 = never pivot

    def act(self, engine: TickEngine, stalled_months: int) -> List[Dict[str, Any]]:
        events: List[Dict[str, Any]] = []
        state = engine.state
        payroll = sum(float(e.salary) for e in state.employees)
        can_afford = float(state.cash) > (payroll + engine.tuning.developer_salary) * self.min_runway_months
        if len(state.employees) < self.target_team and can_afford:
            emp = engine.add_random_developer()
            events.append({"month": int(state.month_number), "type": "hire", "name": emp.name})
        state.sales_spend = float(self.sales_spend) if state.launched else 0.0
        if self.pivot_after_stalled_months and stalled_months >= self.pivot_after_stalled_months:
            summary = engine.pivot()
            events.append({"month": int(state.month_number), "type": "pivot", **summary})
        return events


def run_headless_sim(config: Optional[EngineConfig] = None, policy: Optional[SimplePolicy] = None) -> Dict[str, Any]:
    """Run a deterministic simulation and return summary + export."""
    cfg = config or EngineConfig(base_seed=123)
    player = policy or SimplePolicy()
    random = seeded_source("run", cfg.scenario_key, base_seed=int(cfg.base_seed))

    state: GameState = create_state(random, cfg.tuning, get_scenario(cfg.scenario_key))
    initial = copy.deepcopy(state)
    engine = TickEngine(state, random, cfg.tuning)

    logs: List[Dict[str, Any]] = []
    events: List[Dict[str, Any]] = []
    stalled = 0
    best_users = 0
    for _ in range(int(cfg.months)):
        if state.bankrupt:
            break
        acted = player.act(engine, stalled)
        events.extend(acted)
        if any(ev["type"] == "pivot" for ev in acted):
            stalled = 0
        logs.append(engine.tick())
        users = get_user_count(state)
        if is_market_open(state) and users <= best_users:
            stalled += 1
        else:
            stalled = 0
        best_users = max(best_users, users)

    export = make_run_export(
        seed=int(cfg.base_seed),
        config=cfg.to_dict(),
        initial_state=initial,
        month_logs=logs,
        events=events,
    )
    return {
        "months": len(logs),
        "final": state,
        "logs": logs,
        "events": events,
        "export": export,
    }
