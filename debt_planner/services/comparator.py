# debt_planner/services/comparator.py

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from ..domain.debts import DebtForSimulation, STRATEGIES
from ..utils.dates import DateLike
from .simulator import MAX_MONTHS, DIVERGENCE_FACTOR, SimulationResult, run_simulation


@dataclass
class StrategyComparison:
    snowball: SimulationResult
    avalanche: SimulationResult

    @property
    def best_strategy(self) -> str:
        """
        Least total interest wins; a tie goes to fewer months, then snowball.
        An unpayable run never beats a payable one.
        """
        def rank(r: SimulationResult):
            return (not r.is_payable, r.total_interest, r.months)

        return "avalanche" if rank(self.avalanche) < rank(self.snowball) else "snowball"

    @property
    def interest_saved(self) -> float:
        return abs(self.snowball.total_interest - self.avalanche.total_interest)

    def to_dict(self, selected: Optional[str] = None) -> Dict:
        def summary(r: SimulationResult) -> Dict:
            return {
                "months": r.months,
                "total_interest": r.total_interest,
                "is_payable": r.is_payable,
                "final_date": r.final_date,
                "selected": r.strategy == selected,
            }

        return {
            "snowball": summary(self.snowball),
            "avalanche": summary(self.avalanche),
            "best_strategy": self.best_strategy,
            "interest_saved": self.interest_saved,
        }


def compare_strategies(
    debts: Sequence[DebtForSimulation],
    extra_budget: float,
    start_date: DateLike,
    *,
    max_months: int = MAX_MONTHS,
    divergence_factor: float = DIVERGENCE_FACTOR,
) -> StrategyComparison:
    """Two independent runs over the same portfolio, budget and start date."""
    runs = {
        s: run_simulation(
            debts, extra_budget, s, start_date,
            max_months=max_months, divergence_factor=divergence_factor,
        )
        for s in STRATEGIES
    }
    return StrategyComparison(snowball=runs["snowball"], avalanche=runs["avalanche"])
