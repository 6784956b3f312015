# debt_planner/services/report.py

from typing import Dict, List

import pandas as pd

from ..utils.formatters import fmt_money

DETAIL_COLUMNS = [
    "month_index", "date", "debt_id", "debt_name", "payment", "interest",
    "principal", "remaining_balance", "remaining_installments",
]


def details_frame(simulation: Dict) -> pd.DataFrame:
    """
    Flatten a serialized SimulationResult into one row per (month, debt),
    chronological, debts in simulation order within each month.
    """
    rows: List[Dict] = []
    for month in simulation.get("details") or []:
        for e in month.get("entries") or []:
            rows.append({
                "month_index": month["month_index"],
                "date": month["date"],
                "debt_id": e["debt_id"],
                "debt_name": e["debt_name"],
                "payment": float(e["payment"]),
                "interest": float(e["interest"]),
                "principal": float(e["principal"]),
                "remaining_balance": float(e["remaining_balance"]),
                "remaining_installments": e.get("remaining_installments"),
            })
    return pd.DataFrame(rows, columns=DETAIL_COLUMNS)


def balance_frame(simulation: Dict) -> pd.DataFrame:
    """
    Remaining balance per debt (columns) by month label (index), for charting.
    Series are keyed by debt id; names are display labels and may repeat, so a
    repeated name gets its id appended.
    """
    df = details_frame(simulation)
    if df.empty:
        return pd.DataFrame()

    names = df.drop_duplicates("debt_id").set_index("debt_id")["debt_name"]
    repeated = set(names[names.duplicated(keep=False)])

    # paid-off debts drop out of later months; they stay at zero
    chart = (
        df.pivot_table(index="date", columns="debt_id", values="remaining_balance", aggfunc="last", sort=False)
        .reindex(columns=list(names.index))
        .fillna(0.0)
    )
    chart.columns = [
        f"{names[i]} ({i})" if names[i] in repeated else names[i]
        for i in chart.columns
    ]
    return chart


def display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Money columns formatted for the table view."""
    return pd.DataFrame({
        "Month": df["month_index"],
        "Date": df["date"],
        "Debt": df["debt_name"],
        "Payment": df["payment"].apply(fmt_money),
        "Interest": df["interest"].apply(fmt_money),
        "Principal": df["principal"].apply(fmt_money),
        "Remaining": df["remaining_balance"].apply(fmt_money),
        "Installments left": df["remaining_installments"].apply(lambda x: "—" if pd.isna(x) else int(x)),
    })


def comparison_frame(comparison: Dict) -> pd.DataFrame:
    """Side-by-side summary of a serialized StrategyComparison."""
    rows = []
    for name in ("snowball", "avalanche"):
        c = comparison[name]
        rows.append({
            "Strategy": name.capitalize() + (" (selected)" if c.get("selected") else ""),
            "Months": c["months"],
            "Total interest": fmt_money(c["total_interest"]),
            "Payable": "yes" if c["is_payable"] else "no",
            "Debt-free by": c["final_date"],
        })
    return pd.DataFrame(rows)
