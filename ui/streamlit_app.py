# ui/streamlit_app.py

import json
from datetime import date

import pandas as pd
import streamlit as st

from debt_planner.domain.errors import UpstreamError
from debt_planner.services.report import balance_frame, comparison_frame, details_frame, display_frame
from debt_planner.utils.config import settings
from debt_planner.utils.formatters import fmt_money, pct_from_fraction
from debt_planner.utils.http import get, post

# You can override this when launching:
#   API_BASE=http://localhost:5002 streamlit run ui/streamlit_app.py
API_BASE = settings.API_BASE.rstrip("/")

st.set_page_config(page_title="Debt Payoff Simulator", layout="wide")
st.title("Debt Payoff Simulator")

with st.expander("Connection"):
    st.caption("Backend base URL used by the UI")
    st.code(API_BASE, language="bash")

# -------- Portfolio --------
st.subheader("Active Debts")
try:
    status, portfolio = get(f"{API_BASE}/debts/portfolio")
except UpstreamError as e:
    st.error(e.message)
    st.stop()

if status != 200:
    st.error(portfolio.get("error", portfolio))
    st.stop()

for w in portfolio["exclusions"] + portfolio["warnings"]:
    st.warning(w)

if not portfolio["debts"]:
    st.info("No active debts with a rate and minimum payment to simulate")
    st.stop()

debts_df = pd.DataFrame(portfolio["debts"])
st.dataframe(pd.DataFrame({
    "Debt": debts_df["name"],
    "Balance": debts_df["balance"].apply(fmt_money),
    "Rate": debts_df["interest_rate_value"].apply(pct_from_fraction) + " " + debts_df["interest_rate_type"],
    "Minimum payment": debts_df["minimum_payment"].apply(fmt_money),
}), use_container_width=True)

# -------- Inputs --------
left, mid, right = st.columns(3)
with left:
    extra_budget = st.number_input("Extra monthly budget", min_value=0.0, value=0.0, step=10_000.0)
with mid:
    strategy = st.radio(
        "Strategy", ["snowball", "avalanche"], horizontal=True,
        help="Snowball: smallest balance first. Avalanche: highest rate first.",
    )
with right:
    start_date = st.date_input("Start date", value=date.today())

body = {"extra_budget": extra_budget, "strategy": strategy, "start_date": start_date.isoformat()}

cols = st.columns(2)
simulate = cols[0].button("Run Projection")
compare = cols[1].button("Compare Strategies")

# -------- Simulation --------
if simulate:
    try:
        status, out = post(f"{API_BASE}/debts/simulate", body)
    except UpstreamError as e:
        st.error(e.message)
        st.stop()

    if status != 200:
        st.error(out.get("error", out))
    else:
        sim = out["simulation"]
        m1, m2, m3 = st.columns(3)
        m1.metric("Months to debt-free", sim["months"])
        m2.metric("Total interest", fmt_money(sim["total_interest"]))
        m3.metric("Debt-free by", sim["final_date"])
        if not sim["is_payable"]:
            st.error(
                "This portfolio does not pay off: minimum payments do not cover interest "
                f"(stopped: {sim['stop_reason']})."
            )

        st.download_button(
            "Download JSON",
            data=json.dumps(out, indent=2),
            file_name="debt_projection.json",
            mime="application/json",
        )

        chart = balance_frame(sim)
        if not chart.empty:
            st.line_chart(chart, height=260)

        details = details_frame(sim)
        with st.expander("Monthly breakdown"):
            st.dataframe(display_frame(details), use_container_width=True, hide_index=True)
        st.download_button(
            "Download Monthly Breakdown (CSV)",
            data=details.to_csv(index=False),
            file_name="debt_projection.csv",
            mime="text/csv",
        )

# -------- Comparison --------
if compare:
    try:
        status, out = post(f"{API_BASE}/debts/compare", body)
    except UpstreamError as e:
        st.error(e.message)
        st.stop()

    if status != 200:
        st.error(out.get("error", out))
    else:
        c = out["comparison"]
        st.subheader("Snowball vs Avalanche")
        st.dataframe(comparison_frame(c), use_container_width=True, hide_index=True)
        st.success(
            f"{c['best_strategy'].capitalize()} pays the least interest "
            f"({fmt_money(c['interest_saved'])} difference)."
        )
