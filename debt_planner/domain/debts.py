# debt_planner/domain/debts.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Compounding-period tags for a stated rate
RATE_TYPES = ("EA", "EM")

# Repayment priority heuristics
STRATEGIES = ("snowball", "avalanche")


@dataclass(frozen=True)
class DebtForSimulation:
    """
    Immutable snapshot of one active debt, as handed to the simulator.

    interest_rate_value is a fraction (0.025 = 2.5%) whose meaning depends on
    interest_rate_type:
      - "EA": effective annual
      - "EM": effective monthly
    """
    id: str
    name: str
    balance: float
    interest_rate_value: float
    interest_rate_type: str
    minimum_payment: float
    total_installments: Optional[int] = None
    paid_installments: Optional[int] = None
