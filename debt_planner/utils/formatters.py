# debt_planner/utils/formatters.py

from decimal import Decimal, ROUND_HALF_UP


def fmt(x: float, places: str = "0.01") -> float:
    """
    Round to given decimal places (as string pattern) using HALF_UP.
    Use str(x) to avoid binary float artifacts.
    """
    return float(Decimal(str(x)).quantize(Decimal(places), rounding=ROUND_HALF_UP))


def fmt_money(x) -> str:
    try:
        return f"${fmt(float(x)):,.2f}"
    except Exception:
        return "$0.00"


def pct_from_fraction(x, places: int = 2) -> str:
    """
    x is a fraction (e.g., 0.0825). Convert to percentage text.
    """
    try:
        return f"{float(x) * 100:.{places}f}%"
    except Exception:
        return "—"
