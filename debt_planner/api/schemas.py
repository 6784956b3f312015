import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from ..domain.debts import STRATEGIES
from ..domain.errors import BadRequest
from ..utils.dates import parse_date

@dataclass
class SimulationRequest:
    extra_budget: float = 0.0
    strategy: str = "snowball"
    start_date: date = None
    debts: Optional[List[Dict]] = None  # raw debt records; None -> read from the store

def parse_simulation_request(body: Dict[str, Any], require_strategy: bool = True) -> SimulationRequest:
    """
    Validate a /debts/simulate or /debts/compare body. Raises BadRequest
    naming the offending field.
    """
    if not isinstance(body, dict):
        raise BadRequest("expected a JSON object")

    raw_budget = body.get("extra_budget")
    if isinstance(raw_budget, bool):
        raise BadRequest("extra_budget must be a number", field="extra_budget")
    try:
        extra_budget = float(raw_budget) if raw_budget not in (None, "") else 0.0
    except (TypeError, ValueError):
        raise BadRequest("extra_budget must be a number", field="extra_budget")
    if not math.isfinite(extra_budget) or extra_budget < 0:
        raise BadRequest("extra_budget must be a finite number >= 0", field="extra_budget")

    strategy = str(body.get("strategy") or "snowball").lower()
    if strategy not in STRATEGIES:
        if require_strategy:
            raise BadRequest(f"strategy must be one of {', '.join(STRATEGIES)}", field="strategy")
        strategy = None

    raw_date = body.get("start_date")
    try:
        start = parse_date(raw_date) if raw_date else date.today()
    except ValueError:
        raise BadRequest("start_date must be an ISO-8601 date (YYYY-MM-DD)", field="start_date")

    debts = body.get("debts")
    if debts is not None and not (isinstance(debts, list) and all(isinstance(d, dict) for d in debts)):
        raise BadRequest("debts must be a list of objects", field="debts")

    return SimulationRequest(extra_budget=extra_budget, strategy=strategy, start_date=start, debts=debts)
