import logging
import math
from datetime import date
from typing import Optional

from app.utils.date_utils import shift_date
from savings.models import Feasibility, SpendingPattern

logger = logging.getLogger(__name__)

# calibration constant: surplus-to-variance ratio of 5 already scores 100
STABILITY_SCALE = 20
# assume only 80% of the historical surplus actually gets saved
REALISTIC_SAVING_RATE = 0.8

MAX_CONFIDENCE = 100.0
OVER_SURPLUS_PENALTY = 50
TIGHT_SURPLUS_RATIO = 0.8
TIGHT_SURPLUS_PENALTY = 20
LOW_STABILITY = 50
LOW_STABILITY_PENALTY = 30
MEDIUM_STABILITY = 75
MEDIUM_STABILITY_PENALTY = 15
DECREASING_TREND_PENALTY = 15
INCREASING_TREND_BONUS = 10


def surplus_ratio(recommended_monthly_savings: float, average_monthly_surplus: float) -> float:
    if average_monthly_surplus > 0:
        return recommended_monthly_savings / average_monthly_surplus
    return math.inf


def stability_score(average_monthly_surplus: float, monthly_variance: float) -> float:
    if monthly_variance > 0:
        return min(100.0, average_monthly_surplus / monthly_variance * STABILITY_SCALE)
    return 100.0


def confidence_level(ratio: float, stability: float, trend: str) -> float:
    confidence = MAX_CONFIDENCE

    if ratio > 1:
        confidence -= (ratio - 1) * OVER_SURPLUS_PENALTY
    elif ratio > TIGHT_SURPLUS_RATIO:
        confidence -= TIGHT_SURPLUS_PENALTY

    if stability < LOW_STABILITY:
        confidence -= LOW_STABILITY_PENALTY
    elif stability < MEDIUM_STABILITY:
        confidence -= MEDIUM_STABILITY_PENALTY

    if trend == "decreasing":
        confidence -= DECREASING_TREND_PENALTY
    elif trend == "increasing":
        confidence += INCREASING_TREND_BONUS

    return max(0.0, min(MAX_CONFIDENCE, confidence))


def risk_level(is_achievable: bool, ratio: float, confidence: float, stability: float) -> str:
    if not is_achievable or ratio > 0.9 or confidence < 50 or stability < LOW_STABILITY:
        return "high"
    if ratio > 0.6 or confidence < 70 or stability < MEDIUM_STABILITY:
        return "medium"
    return "low"


def months_to_complete(amount_remaining: float, average_monthly_surplus: float) -> Optional[int]:
    """Months needed at the realistic saving rate; None without a positive surplus."""
    if average_monthly_surplus <= 0:
        return None
    realistic_monthly = average_monthly_surplus * REALISTIC_SAVING_RATE
    return max(0, math.ceil(amount_remaining / realistic_monthly))


def score_feasibility(
    recommended_monthly_savings: float,
    pattern: SpendingPattern,
    amount_remaining: float,
    now: date,
) -> Feasibility:
    """
    Check the plan's next-month ask against the observed surplus, how steady
    that surplus is, and where it is heading.
    """
    surplus = pattern.average_monthly_surplus
    is_achievable = surplus >= recommended_monthly_savings
    ratio = surplus_ratio(recommended_monthly_savings, surplus)
    stability = stability_score(surplus, pattern.monthly_variance)
    confidence = confidence_level(ratio, stability, pattern.trend)
    risk = risk_level(is_achievable, ratio, confidence, stability)

    months = months_to_complete(amount_remaining, surplus)
    projected = shift_date(now, months) if months is not None else None

    logger.debug(
        "feasibility: achievable=%s ratio=%.3f stability=%.1f confidence=%.1f risk=%s",
        is_achievable, ratio, stability, confidence, risk,
    )

    return Feasibility(
        is_achievable=is_achievable,
        surplus_ratio=ratio,
        stability_score=stability,
        confidence_level=confidence,
        risk_level=risk,
        months_to_complete=months,
        projected_completion_date=projected,
    )
