# banding.py
# Deterministic band classification for the overall Semantic Score.
# Lower bounds are inclusive; no clamping to 0-100 happens here.

from __future__ import annotations

from typing import List, Tuple

EXCELLENT = "excellent"
GOOD = "good"
AT_RISK = "at_risk"
POOR = "poor"
CRITICAL = "critical"

SCORE_BANDS: List[Tuple[float, str]] = [
    (85, EXCELLENT),
    (70, GOOD),
    (50, AT_RISK),
    (30, POOR),
]


def score_band(score: float) -> str:
    for floor, band in SCORE_BANDS:
        if score >= floor:
            return band
    return CRITICAL
