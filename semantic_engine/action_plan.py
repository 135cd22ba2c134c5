# action_plan.py
# Prioritized remediation list built from term analyses and component scores.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .components import ComponentResult
from .rounding import round_half_up
from .term_analysis import TermAnalysis

QUICK_WIN = "quick_win"
HIGH_IMPACT = "high_impact"
SYSTEMIC = "systemic"
MAINTENANCE = "maintenance"

MAX_QUICK_WINS = 3
MAX_HIGH_IMPACT = 3
SYSTEMIC_COMPONENTS = 2
SYSTEMIC_THRESHOLD = 60
QUICK_WIN_MIN_OCCURRENCES = 3

MAINTENANCE_ITEMS = [
    ("Scan new documents before publishing", "Prevent new semantic collisions"),
    ("Monthly consistency check across document corpus", "Catch drift early"),
]


@dataclass
class ActionItem:
    priority: str
    action: str
    rationale: str
    related_terms: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priority": self.priority,
            "action": self.action,
            "rationale": self.rationale,
            "related_terms": list(self.related_terms),
        }


def build_action_plan(
    term_analyses: Sequence[TermAnalysis],
    components: Sequence[ComponentResult],
) -> List[ActionItem]:
    actions: List[ActionItem] = []

    undefined_frequent = [
        t for t in term_analyses
        if not t.is_defined and t.occurrence_count > QUICK_WIN_MIN_OCCURRENCES
    ][:MAX_QUICK_WINS]
    for t in undefined_frequent:
        actions.append(ActionItem(
            priority=QUICK_WIN,
            action=f"Define '{t.term}' - one definition, used everywhere",
            rationale=f"Appears {t.occurrence_count} times without definition",
            related_terms=(t.term,),
        ))

    inconsistent = [t for t in term_analyses if t.inconsistency_detected][:MAX_HIGH_IMPACT]
    for t in inconsistent:
        actions.append(ActionItem(
            priority=HIGH_IMPACT,
            action=f"Resolve inconsistent usage of '{t.term}'",
            rationale=f"Used differently across {len(t.document_names)} documents",
            related_terms=(t.term,),
        ))

    weakest = sorted(components, key=lambda c: c.score)[:SYSTEMIC_COMPONENTS]
    for c in weakest:
        if c.score < SYSTEMIC_THRESHOLD:
            actions.append(ActionItem(
                priority=SYSTEMIC,
                action=f"Improve {c.name} (currently {round_half_up(c.score)}/100)",
                rationale="This component is dragging down your overall score",
            ))

    for action, rationale in MAINTENANCE_ITEMS:
        actions.append(ActionItem(priority=MAINTENANCE, action=action, rationale=rationale))

    return actions
