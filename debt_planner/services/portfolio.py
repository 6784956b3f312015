# debt_planner/services/portfolio.py

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..domain.debts import DebtForSimulation, RATE_TYPES
from ..utils.logging import get_logger
from .simulator import monthly_rate

log = get_logger(__name__)

ACTIVE = "active"


class _Invalid(Exception):
    """A record field could not be used; message is the exclusion reason suffix."""


@dataclass
class Portfolio:
    debts: List[DebtForSimulation] = field(default_factory=list)
    exclusions: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.debts

    def to_dict(self) -> Dict:
        return {
            "debts": [
                {
                    "id": d.id,
                    "name": d.name,
                    "balance": d.balance,
                    "interest_rate_value": d.interest_rate_value,
                    "interest_rate_type": d.interest_rate_type,
                    "minimum_payment": d.minimum_payment,
                    "total_installments": d.total_installments,
                    "paid_installments": d.paid_installments,
                }
                for d in self.debts
            ],
            "exclusions": list(self.exclusions),
            "warnings": list(self.warnings),
        }


def _number(record: Mapping[str, Any], key: str) -> Optional[float]:
    """
    None when absent; raises _Invalid for unparseable, non-finite or negative
    values so NaN/inf never reach the simulator.
    """
    raw = record.get(key)
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise _Invalid(f"invalid {key}")
    if not math.isfinite(value):
        raise _Invalid(f"invalid {key}")
    if value < 0:
        raise _Invalid(f"negative {key}")
    return value


def _count(record: Mapping[str, Any], key: str) -> Optional[int]:
    value = _number(record, key)
    if value is None:
        return None
    if value != int(value):
        raise _Invalid(f"invalid {key}")
    return int(value)


def _to_debt(record: Mapping[str, Any], name: str) -> DebtForSimulation:
    rate = _number(record, "interest_rate_value")
    minimum = _number(record, "minimum_payment")
    if rate is None or minimum is None:
        raise _Invalid("missing rate or minimum payment")

    balance = _number(record, "balance")
    if balance is None:
        raise _Invalid("missing balance")

    rate_type = str(record.get("interest_rate_type") or "").upper()
    if rate_type not in RATE_TYPES:
        raise _Invalid("unknown rate type")

    return DebtForSimulation(
        id=str(record.get("id") or record.get("_id") or name),
        name=name,
        balance=balance,
        interest_rate_value=rate,
        interest_rate_type=rate_type,
        minimum_payment=minimum,
        total_installments=_count(record, "total_installments"),
        paid_installments=_count(record, "paid_installments"),
    )


def _warnings_for(debt: DebtForSimulation) -> List[str]:
    out = []
    first_interest = debt.balance * monthly_rate(debt.interest_rate_value, debt.interest_rate_type)
    if debt.minimum_payment <= first_interest:
        out.append(f'"{debt.name}": minimum payment does not cover interest.')
    if debt.interest_rate_value > 1:
        out.append(f'"{debt.name}": rate {debt.interest_rate_value * 100:.0f}% is unusually high.')
    return out


def load_portfolio(records: Iterable[Mapping[str, Any]]) -> Portfolio:
    """
    Build the simulator's input snapshot from raw debt records.

    - status present and not "active"     -> skipped silently
    - missing rate or minimum payment     -> excluded, with a reason
    - non-finite / negative numbers       -> excluded, with a reason
    - minimum payment <= first interest,
      or nominal rate above 100%          -> kept, with a warning

    Input order is preserved; it is the simulator's tie-break order.
    """
    portfolio = Portfolio()
    for record in records:
        status = record.get("status")
        if status is not None and str(status).lower() != ACTIVE:
            continue

        name = str(record.get("name") or record.get("id") or record.get("_id") or "Unnamed debt")
        try:
            debt = _to_debt(record, name)
        except _Invalid as e:
            portfolio.exclusions.append(f'"{name}" excluded: {e}.')
            continue

        portfolio.debts.append(debt)
        portfolio.warnings.extend(_warnings_for(debt))

    log.info(
        f"portfolio loaded: {len(portfolio.debts)} debts",
        extra={"excluded": len(portfolio.exclusions), "warnings": len(portfolio.warnings)},
    )
    return portfolio
