# meaning_debt.py
# Meaning Debt - annual cost-of-ambiguity estimate (debt-v1.0)
# Deterministic. Rounded to the nearest 1000; breakdown lines are rounded
# independently and will not sum exactly to either bound.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .rounding import round_half_up

MEANING_DEBT_VERSION = "debt-v1.0"

BASE_COST_PER_EMPLOYEE = 2500
LOW_FACTOR = 0.7
HIGH_FACTOR = 1.3
RISK_TERM_FACTOR = 0.1

BREAKDOWN_SHARES = {
    "rework_misalignment": 0.35,
    "client_escalations": 0.20,
    "employee_clarification_time": 0.25,
    "lost_deals_confusion": 0.20,
}


def round_thousands(amount: float) -> int:
    return round_half_up(amount / 1000.0) * 1000


@dataclass
class MeaningDebt:
    low_estimate: int
    high_estimate: int
    breakdown: Dict[str, int] = field(default_factory=dict)
    currency: str = "USD"
    period: str = "annual"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "low_estimate": self.low_estimate,
            "high_estimate": self.high_estimate,
            "currency": self.currency,
            "period": self.period,
            "breakdown": dict(self.breakdown),
        }


def estimate_meaning_debt(overall_score: float, company_size: int, risk_term_count: int) -> MeaningDebt:
    base = company_size * BASE_COST_PER_EMPLOYEE
    score_multiplier = (100 - overall_score) / 50
    risk_multiplier = 1 + risk_term_count * RISK_TERM_FACTOR
    cost = base * score_multiplier * risk_multiplier

    return MeaningDebt(
        low_estimate=round_thousands(cost * LOW_FACTOR),
        high_estimate=round_thousands(cost * HIGH_FACTOR),
        breakdown={k: round_thousands(cost * share) for k, share in BREAKDOWN_SHARES.items()},
    )
