import logging
from datetime import date
from typing import Iterable, Mapping

from savings.aggregate import DEFAULT_WINDOW_MONTHS, aggregate_monthly
from savings.feasibility import score_feasibility
from savings.models import (
    PurchaseAnalysis,
    PurchaseGoal,
    SavingsAnalysis,
    SpendingPattern,
    Transaction,
)
from savings.planner import clamp_urgency, plan_savings
from savings.suggestions import SuggestionContext, compose_suggestions
from savings.trend import analyze_pattern

logger = logging.getLogger(__name__)


def build_spending_pattern(
    transactions: Iterable[Transaction],
    account_types: Mapping[str, str],
    now: date,
    window_months: int = DEFAULT_WINDOW_MONTHS,
) -> SpendingPattern:
    buckets = aggregate_monthly(transactions, account_types, now, window_months)
    return analyze_pattern(buckets)


def analyze_purchase(goal: PurchaseGoal, pattern: SpendingPattern, now: date) -> PurchaseAnalysis:
    """
    Build the savings plan for a goal and judge it against the spending pattern.
    """
    urgency = clamp_urgency(goal.urgency)
    plan = plan_savings(goal, now)
    feasibility = score_feasibility(
        plan.recommended_monthly_savings, pattern, plan.amount_remaining, now
    )
    suggestions = compose_suggestions(
        SuggestionContext(pattern=pattern, plan=plan, feasibility=feasibility, urgency=urgency)
    )

    if goal.target_amount > 0:
        progress_percent = goal.current_saved / goal.target_amount * 100
    else:
        progress_percent = 0.0

    analysis = SavingsAnalysis(
        recommended_monthly_savings=plan.recommended_monthly_savings,
        months_remaining=plan.months_remaining,
        amount_remaining=plan.amount_remaining,
        progress_percent=progress_percent,
        is_achievable=feasibility.is_achievable,
        confidence_level=feasibility.confidence_level,
        average_monthly_surplus=pattern.average_monthly_surplus,
        suggestions=suggestions,
        projected_completion_date=feasibility.projected_completion_date,
        risk_level=feasibility.risk_level,
    )

    logger.info(
        "savings analysis: %.2f/month over %d months, risk=%s, %d suggestions",
        analysis.recommended_monthly_savings, analysis.months_remaining,
        analysis.risk_level, len(suggestions),
    )
    return PurchaseAnalysis(analysis=analysis, allocation_plan=plan.allocation_plan)
