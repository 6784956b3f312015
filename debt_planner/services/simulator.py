# debt_planner/services/simulator.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..domain.debts import DebtForSimulation, STRATEGIES
from ..utils.dates import DateLike, add_months, month_label, parse_date
from ..utils.logging import get_logger

log = get_logger(__name__)

# Safety bounds against portfolios that never amortize
MAX_MONTHS = 600            # 50 years
DIVERGENCE_FACTOR = 10.0    # stop once total balance exceeds 10x the starting total

STOP_PAID_OFF = "paid_off"
STOP_MAX_MONTHS = "max_months"
STOP_DIVERGED = "diverged"


def monthly_rate(rate_value: float, rate_type: str) -> float:
    """
    Normalize a stated rate to an effective monthly rate.
      EA -> (1 + r)^(1/12) - 1   (compounding, not r / 12)
      EM -> r unchanged
    Values are not validated here; the portfolio loader does that.
    """
    if rate_type == "EA":
        return (1.0 + rate_value) ** (1.0 / 12.0) - 1.0
    if rate_type == "EM":
        return rate_value
    raise ValueError(f"Unknown interest rate type: {rate_type}")


# -------------------- result types --------------------

@dataclass
class DebtMonthlyEntry:
    debt_id: str
    debt_name: str
    payment: float
    interest: float
    principal: float
    remaining_balance: float
    remaining_installments: Optional[int] = None

    def to_dict(self) -> Dict:
        return {
            "debt_id": self.debt_id,
            "debt_name": self.debt_name,
            "payment": self.payment,
            "interest": self.interest,
            "principal": self.principal,
            "remaining_balance": self.remaining_balance,
            "remaining_installments": self.remaining_installments,
        }


@dataclass
class MonthlyDetail:
    month_index: int
    date: str                       # YYYY-MM
    entries: List[DebtMonthlyEntry] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "month_index": self.month_index,
            "date": self.date,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class SimulationResult:
    months: int
    total_interest: float
    details: List[MonthlyDetail]
    final_date: str                 # YYYY-MM-DD
    is_payable: bool
    strategy: str
    extra_budget: float
    stop_reason: str

    def to_dict(self) -> Dict:
        return {
            "months": self.months,
            "total_interest": self.total_interest,
            "final_date": self.final_date,
            "is_payable": self.is_payable,
            "strategy": self.strategy,
            "extra_budget": self.extra_budget,
            "stop_reason": self.stop_reason,
            "details": [d.to_dict() for d in self.details],
        }


# -------------------- working state --------------------

@dataclass
class _DebtState:
    """Per-run mutable view of one debt; index-aligned with the input list."""
    debt: DebtForSimulation
    monthly_rate: float
    current_balance: float
    months_simulated: int = 0

    @property
    def accruing(self) -> bool:
        return self.current_balance > 0

    def remaining_installments(self) -> Optional[int]:
        # tracking needs both counts; a null paid count means "not tracked"
        total = self.debt.total_installments
        paid = self.debt.paid_installments
        if not total or paid is None:
            return None
        return max(0, total - (paid + self.months_simulated))


def priority_order(states: Sequence[_DebtState], strategy: str) -> List[_DebtState]:
    """
    Accruing debts ordered by repayment priority.
      snowball  -> smallest current balance first
      avalanche -> highest NOMINAL interest_rate_value first (EA and EM are
                   compared as given, not normalized)
    Ties keep input order (sorted() is stable).
    """
    candidates = [s for s in states if s.accruing]
    if strategy == "snowball":
        return sorted(candidates, key=lambda s: s.current_balance)
    if strategy == "avalanche":
        return sorted(candidates, key=lambda s: -s.debt.interest_rate_value)
    raise ValueError(f"Unknown strategy: {strategy}")


def select_target(states: Sequence[_DebtState], strategy: str) -> Optional[_DebtState]:
    """The single debt that receives this month's extra budget (None if all paid)."""
    ordered = priority_order(states, strategy)
    return ordered[0] if ordered else None


# -------------------- simulation loop --------------------

def run_simulation(
    debts: Sequence[DebtForSimulation],
    extra_budget: float,
    strategy: str,
    start_date: DateLike,
    *,
    max_months: int = MAX_MONTHS,
    divergence_factor: float = DIVERGENCE_FACTOR,
) -> SimulationResult:
    """
    Project the portfolio month by month until every balance is zero or a
    safety bound trips.

    Each month:
      1. the target debt (per strategy) gets minimum_payment + extra_budget,
         every other accruing debt gets its minimum_payment
      2. payment is capped at balance + interest; leftover extra budget is NOT
         carried to another debt in the same month
      3. after the month, stop if total balance > divergence_factor x initial

    Pure: the input snapshot is never mutated and identical inputs give
    identical results.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy: {strategy}")

    start = parse_date(start_date)
    states = [
        _DebtState(
            debt=d,
            monthly_rate=monthly_rate(d.interest_rate_value, d.interest_rate_type),
            current_balance=d.balance,
        )
        for d in debts
    ]
    initial_total = sum(d.balance for d in debts)

    details: List[MonthlyDetail] = []
    total_interest = 0.0
    month_index = 0
    stop_reason = STOP_PAID_OFF

    while any(s.accruing for s in states) and month_index < max_months:
        month_index += 1
        detail = MonthlyDetail(
            month_index=month_index,
            date=month_label(add_months(start, month_index - 1)),
        )

        target = select_target(states, strategy)

        for s in states:
            if not s.accruing:
                continue

            interest = s.current_balance * s.monthly_rate
            payment = s.debt.minimum_payment
            if s is target:
                payment += extra_budget

            total_due = s.current_balance + interest
            if payment >= total_due:
                payment = total_due

            principal = payment - interest
            s.current_balance = max(0.0, s.current_balance - principal)
            s.months_simulated += 1
            total_interest += interest

            detail.entries.append(DebtMonthlyEntry(
                debt_id=s.debt.id,
                debt_name=s.debt.name,
                payment=payment,
                interest=interest,
                principal=principal,
                remaining_balance=s.current_balance,
                remaining_installments=s.remaining_installments(),
            ))

        details.append(detail)

        current_total = sum(s.current_balance for s in states)
        if current_total > initial_total * divergence_factor:
            stop_reason = STOP_DIVERGED
            log.info(
                f"simulation diverged at month {month_index}",
                extra={"strategy": strategy, "balance": current_total},
            )
            break

    is_payable = not any(s.accruing for s in states)
    if not is_payable and stop_reason != STOP_DIVERGED:
        stop_reason = STOP_MAX_MONTHS
        log.info(f"simulation hit the {max_months}-month ceiling", extra={"strategy": strategy})

    log.debug(
        f"simulated {len(states)} debts over {month_index} months",
        extra={"strategy": strategy, "is_payable": is_payable},
    )

    return SimulationResult(
        months=month_index,
        total_interest=total_interest,
        details=details,
        final_date=add_months(start, month_index).isoformat(),
        is_payable=is_payable,
        strategy=strategy,
        extra_budget=extra_budget,
        stop_reason=stop_reason,
    )
