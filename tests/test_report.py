from debt_planner.domain.debts import DebtForSimulation
from debt_planner.services.comparator import compare_strategies
from debt_planner.services.report import balance_frame, comparison_frame, details_frame, display_frame
from debt_planner.services.simulator import run_simulation


def simulation():
    debts = [
        DebtForSimulation("a", "Phone", 200, 0.0, "EM", 100, total_installments=2, paid_installments=0),
        DebtForSimulation("b", "Card", 1_000, 0.0, "EM", 250),
    ]
    return run_simulation(debts, 0, "snowball", "2024-01-01").to_dict()


def test_details_frame_one_row_per_entry():
    df = details_frame(simulation())
    # Phone: 2 months, Card: 4 months
    assert len(df) == 6
    assert list(df["date"].unique()) == ["2024-01", "2024-02", "2024-03", "2024-04"]
    assert list(df[df["month_index"] == 1]["debt_name"]) == ["Phone", "Card"]


def test_details_frame_empty():
    df = details_frame({"details": []})
    assert df.empty
    assert "remaining_balance" in df.columns


def test_balance_frame_fills_paid_off_debts_with_zero():
    chart = balance_frame(simulation())
    assert list(chart.index) == ["2024-01", "2024-02", "2024-03", "2024-04"]
    assert chart.loc["2024-04", "Phone"] == 0.0
    assert chart.loc["2024-02", "Card"] == 500.0


def test_display_frame_formats_money():
    table = display_frame(details_frame(simulation()))
    assert table.iloc[0]["Payment"] == "$100.00"
    assert table.iloc[0]["Installments left"] == 1
    assert table.iloc[1]["Installments left"] == "—"


def test_comparison_frame():
    debts = [DebtForSimulation("a", "Phone", 200, 0.0, "EM", 100)]
    out = compare_strategies(debts, 0, "2024-01-01").to_dict(selected="avalanche")
    table = comparison_frame(out)
    assert list(table["Strategy"]) == ["Snowball", "Avalanche (selected)"]
    assert list(table["Months"]) == [2, 2]
    assert list(table["Payable"]) == ["yes", "yes"]


def test_balance_frame_keeps_debts_that_share_a_name():
    debts = [
        DebtForSimulation("visa", "Card", 1_000, 0.0, "EM", 250),
        DebtForSimulation("amex", "Card", 5_000, 0.0, "EM", 500),
    ]
    chart = balance_frame(run_simulation(debts, 0, "snowball", "2024-01-01").to_dict())
    assert list(chart.columns) == ["Card (visa)", "Card (amex)"]
    assert chart.loc["2024-01", "Card (visa)"] == 750.0
    assert chart.loc["2024-01", "Card (amex)"] == 4_500.0
    assert chart.loc["2024-10", "Card (visa)"] == 0.0
