"""engine.logging

Small helpers for storing run logs.

A run log is JSON-serializable so it can be exported/imported later.
It is a record of what happened, not a save format: runs are replayed from
(seed, config), never restored from a log.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from core.state import GameState, state_to_dict

RUN_EXPORT_VERSION = 2


def make_run_export(
    *,
    seed: int,
    config: Dict[str, Any],
    initial_state: GameState,
    month_logs: List[Dict[str, Any]],
    events: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "version": RUN_EXPORT_VERSION,
        "seed": int(seed),
        "config": dict(config),
        "initial_state": state_to_dict(initial_state),
        "month_logs": list(month_logs),
        "events": list(events or []),
    }


def dumps_run_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)


def month_log_row(log: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten one month log into a table row (UI history, CSV-ish exports)."""
    after = dict(log.get("after") or {})
    market = dict(log.get("market") or {})
    finance = dict(log.get("finance") or {})
    return {
        "month": int(log.get("month", 0)),
        "cash": float(after.get("cash", 0.0)),
        "users": int(after.get("users", 0)),
        "maturity": float(after.get("product_maturity", 0.0)),
        "debt": float(after.get("technical_debt", 0.0)),
        "reputation": float(after.get("reputation", 0.0)),
        "new_users": int(market.get("paid_users", 0)) + int(market.get("organic_users", 0)),
        "churned": int(market.get("churned_users", 0)),
        "income": float(finance.get("income", 0.0)),
        "net": float(finance.get("net", 0.0)),
    }
