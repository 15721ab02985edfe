"""Startup Sim dev panel (Streamlit)

Principles:
- UI only renders + triggers.
- Core domain and engine are pure Python modules; the state lives in
  st.session_state and is only mutated through TickEngine.

Run locally: streamlit run app.py
"""

from __future__ import annotations

import copy
from datetime import datetime
from typing import Any, Dict, List

import streamlit as st

from core import API_VERSION
from core.development import current_development_allocation
from core.finance import calculate_burn, runway_months
from core.market import calculate_churn_rate, calculate_organic_users, get_mrr, get_user_count
from core.rng import seeded_source
from core.scenarios import DEFAULT_SCENARIOS, get_scenario
from core.team import calculate_output

from engine.config import EngineConfig
from engine.logging import dumps_run_export, make_run_export, month_log_row
from engine.pipeline import TickEngine


APP_TITLE = "Startup Sim"
APP_SUBTITLE = "Monthly startup simulation: team, tech debt, product-market fit, cohorts, runway."
APP_VERSION = "0.4.0"

# UI range for the debt target; the core accepts anything and clamps at use.
TECH_DEBT_TARGET_MIN = 0.1
TECH_DEBT_TARGET_MAX = 0.9

st.set_page_config(page_title=APP_TITLE, page_icon="📈", layout="wide", initial_sidebar_state="expanded")

CSS = """
<style>
.block-container {padding-top: 3.2rem; padding-bottom: 2rem;}
.card {
  border: 1px solid rgba(255,255,255,0.08);
  border-radius: 16px;
  padding: 14px 16px;
  background: rgba(255,255,255,0.03);
}
.pill {
  display: inline-block;
  padding: 2px 10px;
  border-radius: 999px;
  border: 1px solid rgba(255,255,255,0.12);
  font-size: 12px;
  opacity: .85;
}
.pill.warn {border-color: rgba(255,190,90,0.35);}
.pill.ok {border-color: rgba(120,255,160,0.25);}
.pill.bad {border-color: rgba(255,120,120,0.25);}
.small {font-size: 13px; opacity:.75;}
</style>
"""

st.markdown(CSS, unsafe_allow_html=True)


# =========================
# Helpers
# =========================


def _now_id() -> str:
    return datetime.utcnow().strftime("%Y%m%d%H%M%S%f")


def _stat_badge(val: float, lo: float, hi: float) -> str:
    if val <= lo:
        return "bad"
    if val >= hi:
        return "ok"
    return "warn"


def _fmt(value: Any) -> str:
    if isinstance(value, float) and 0.0 < abs(value) < 1.0:
        return f"{value:.3f}"
    if isinstance(value, float):
        return f"{value:,.0f}"
    return str(value)


# =========================
# Session State
# =========================


def _ensure_state() -> None:
    ss = st.session_state
    if "run_id" not in ss:
        ss.run_id = _now_id()
    if "base_seed" not in ss:
        ss.base_seed = 42
    if "scenario_key" not in ss:
        ss.scenario_key = "bootstrapped"
    if "engine" not in ss:
        ss.engine = None
    if "initial_state" not in ss:
        ss.initial_state = None
    if "logs" not in ss:
        ss.logs = []
    if "events" not in ss:
        ss.events = []


def _start_run() -> None:
    ss = st.session_state
    cfg = EngineConfig(base_seed=int(ss.base_seed), scenario_key=str(ss.scenario_key))
    random = seeded_source("ui", ss.run_id, base_seed=cfg.base_seed)
    engine = TickEngine.new_game(random, cfg.tuning, get_scenario(cfg.scenario_key))
    ss.config = cfg
    ss.engine = engine
    ss.initial_state = copy.deepcopy(engine.state)
    ss.logs = []
    ss.events = []


def _reset_run() -> None:
    ss = st.session_state
    for k in list(ss.keys()):
        del ss[k]
    _ensure_state()


# =========================
# Rendering
# =========================


def render_sidebar() -> None:
    ss = st.session_state
    st.sidebar.header("New run")
    ss.scenario_key = st.sidebar.selectbox(
        "Scenario",
        options=list(DEFAULT_SCENARIOS.keys()),
        index=list(DEFAULT_SCENARIOS.keys()).index(ss.scenario_key),
        format_func=lambda k: DEFAULT_SCENARIOS[k].key,
    )
    st.sidebar.caption(get_scenario(ss.scenario_key).desc)
    ss.base_seed = int(st.sidebar.number_input("Seed", min_value=0, value=int(ss.base_seed), step=1))
    c1, c2 = st.sidebar.columns(2)
    if c1.button("Start", use_container_width=True):
        _start_run()
    if c2.button("Reset", use_container_width=True):
        _reset_run()
    st.sidebar.markdown(f"<span class='small'>core {API_VERSION} · app {APP_VERSION}</span>", unsafe_allow_html=True)


def render_stats(engine: TickEngine) -> None:
    state = engine.state
    tuning = engine.tuning
    alloc = current_development_allocation(state, tuning)
    runway = runway_months(state)

    cols = st.columns(4)
    cols[0].metric("Month", state.month_number)
    cols[1].metric("Cash", _fmt(float(state.cash)), delta=_fmt(-calculate_burn(state)))
    cols[2].metric("Users", get_user_count(state))
    cols[3].metric("MRR", _fmt(get_mrr(state)))

    cols = st.columns(4)
    cols[0].metric("Product maturity", f"{state.product_maturity:.3f}")
    cols[1].metric("Tech debt", f"{state.technical_debt:.3f}")
    cols[2].metric("Reputation", f"{state.reputation:.3f}")
    cols[3].metric("Churn rate", f"{calculate_churn_rate(state, tuning):.3f}")

    badge = _stat_badge(runway, 3.0, 12.0)
    phase = "launched" if state.launched else "pre-launch"
    st.markdown(
        f"<div class='card'>"
        f"<span class='pill {badge}'>runway {runway:.1f} mo</span> "
        f"<span class='pill'>{phase}</span> "
        f"<span class='pill'>output {calculate_output(state, tuning):.2f}</span> "
        f"<span class='pill'>clean-up {alloc.clean_up_fraction:.0%}</span> "
        f"<span class='pill'>organic next {calculate_organic_users(state, tuning)}</span>"
        f"</div>",
        unsafe_allow_html=True,
    )
    if state.bankrupt:
        st.error("Bankrupt. The run is over; start a new one from the sidebar.")


def render_controls(engine: TickEngine) -> None:
    ss = st.session_state
    state = engine.state

    c1, c2, c3 = st.columns(3)
    spend = c1.number_input("Sales spend", min_value=0.0, value=float(state.sales_spend), step=100.0)
    price = c2.number_input("Product price", min_value=0.0, value=float(state.product_price), step=5.0)
    target = c3.number_input(
        "Tech debt target",
        min_value=TECH_DEBT_TARGET_MIN,
        max_value=TECH_DEBT_TARGET_MAX,
        value=float(min(TECH_DEBT_TARGET_MAX, max(TECH_DEBT_TARGET_MIN, state.technical_debt_target))),
        step=0.1,
    )
    state.sales_spend = float(spend)
    state.product_price = float(price)
    state.technical_debt_target = float(target)

    b1, b2, b3 = st.columns(3)
    if b1.button("Tick", type="primary", use_container_width=True, disabled=bool(state.bankrupt)):
        ss.logs.append(engine.tick())
        st.rerun()
    if b2.button("Add developer", use_container_width=True):
        emp = engine.add_random_developer()
        ss.events.append({"month": int(state.month_number), "type": "hire", "name": emp.name})
        st.rerun()
    if b3.button("Pivot", use_container_width=True, disabled=bool(state.bankrupt)):
        summary = engine.pivot()
        ss.events.append({"type": "pivot", **summary})
        st.rerun()


def render_team(engine: TickEngine) -> None:
    ss = st.session_state
    st.subheader("Team")
    for i, emp in enumerate(list(engine.state.employees)):
        c1, c2, c3, c4 = st.columns([4, 2, 2, 1])
        c1.write(emp.name or f"Employee {i + 1}")
        c2.write(f"motivation {emp.motivation:.2f}")
        c3.write(f"{emp.months_employed} mo")
        if c4.button("×", key=f"remove-{i}"):
            removed = engine.remove_employee(i)
            ss.events.append({"month": int(engine.state.month_number), "type": "leave", "name": removed.name})
            st.rerun()


def render_history() -> None:
    ss = st.session_state
    if not ss.logs:
        return
    rows: List[Dict[str, Any]] = [month_log_row(x) for x in ss.logs]
    st.subheader("History")
    st.line_chart({"cash": [r["cash"] for r in rows], "users": [r["users"] for r in rows]})
    st.dataframe(rows, use_container_width=True, hide_index=True)

    export = make_run_export(
        seed=int(ss.config.base_seed),
        config=ss.config.to_dict(),
        initial_state=ss.initial_state,
        month_logs=list(ss.logs),
        events=list(ss.events),
    )
    st.download_button(
        "Download run log (JSON)",
        data=dumps_run_export(export),
        file_name=f"startup-sim-{ss.run_id}.json",
        mime="application/json",
    )


def main() -> None:
    _ensure_state()
    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)
    render_sidebar()

    engine = st.session_state.engine
    if engine is None:
        st.info("Pick a scenario and press Start.")
        return

    render_stats(engine)
    render_controls(engine)
    render_team(engine)
    render_history()


main()
