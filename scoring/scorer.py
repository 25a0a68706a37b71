"""
Score arithmetic.

Scoring model:
- Lighthouse category scores (0..1) become integer percentages per strategy.
- The overall score weights each category's mobile + desktop sum
  (performance 20%, accessibility 15%, best practices 15%, SEO 25%) and halves
  the total. The weights sum to 0.75, so the best attainable score is 75.
"""
from __future__ import annotations

import math

from config import SCORING_WEIGHTS
from models import PageSpeedResult, PerformanceScore


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def to_performance_score(result: PageSpeedResult) -> PerformanceScore:
    return PerformanceScore(
        performance=round_half_up(result.performance * 100),
        accessibility=round_half_up(result.accessibility * 100),
        best_practices=round_half_up(result.best_practices * 100),
        seo=round_half_up(result.seo * 100),
    )


def compute_overall_score(mobile: PerformanceScore, desktop: PerformanceScore) -> int:
    weighted = sum(
        (getattr(mobile, category) + getattr(desktop, category)) * weight
        for category, weight in SCORING_WEIGHTS.items()
    )
    return max(0, min(100, round_half_up(weighted / 2)))


def score_label(score: float) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 50:
        return "Needs Work"
    else:
        return "Poor"
