"""
Advisory messages shown next to a savings analysis.

Each rule is a (predicate, message) pair over a SuggestionContext. Rules are
evaluated in display order and every rule whose predicate holds contributes
its message; branches that must not fire together carry the excluding
condition in their own predicate.
"""
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from savings.feasibility import REALISTIC_SAVING_RATE
from savings.models import Feasibility, SavingsPlan, SpendingPattern

HIGH_SURPLUS_USE = 0.7
EASY_SURPLUS_USE = 0.5
BUFFER_STABILITY = 75
BUFFER_VARIANCE_SHARE = 0.5
HIGH_URGENCY = 4
EXPENSE_INCOME_SHARE = 0.7
EXTENSION_MAX_MONTHS = 12
SLIP_TOLERANCE_MONTHS = 2


@dataclass(frozen=True)
class SuggestionContext:
    pattern: SpendingPattern
    plan: SavingsPlan
    feasibility: Feasibility
    urgency: int

    @property
    def extension_months(self) -> Optional[int]:
        """Months to finish at the realistic saving rate, if there is a surplus."""
        surplus = self.pattern.average_monthly_surplus
        if surplus <= 0:
            return None
        return math.ceil(self.plan.amount_remaining / (surplus * REALISTIC_SAVING_RATE))

    @property
    def first_half_total(self) -> float:
        entries = self.plan.allocation_plan[:self.plan.first_half_months]
        return sum(e.amount for e in entries)


Rule = Tuple[Callable[[SuggestionContext], bool], Callable[[SuggestionContext], str]]


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _shortfall(ctx: SuggestionContext) -> str:
    gap = ctx.plan.recommended_monthly_savings - ctx.pattern.average_monthly_surplus
    return (
        f"You need to save {_money(ctx.plan.recommended_monthly_savings)}/month but your "
        f"average surplus is {_money(ctx.pattern.average_monthly_surplus)}, a shortfall of "
        f"{_money(gap)}/month. Consider extending your target date or reducing the target amount."
    )


def _extension(ctx: SuggestionContext) -> str:
    return (
        f"At a realistic savings rate you could reach this goal in {ctx.extension_months} months. "
        f"Consider extending your target to {ctx.extension_months} months."
    )


def _uses_most_of_surplus(ctx: SuggestionContext) -> str:
    return (
        f"This goal will use {ctx.feasibility.surplus_ratio * 100:.0f}% of your typical surplus, "
        "leaving little room for unexpected expenses."
    )


def _very_achievable(ctx: SuggestionContext) -> str:
    return (
        f"This goal is very achievable - it uses only {ctx.feasibility.surplus_ratio * 100:.0f}% "
        "of your typical surplus."
    )


def _buffer(ctx: SuggestionContext) -> str:
    buffer = ctx.pattern.monthly_variance * BUFFER_VARIANCE_SHARE
    return (
        f"Your monthly surplus varies significantly. Consider keeping a buffer of about "
        f"{_money(buffer)} for lean months."
    )


def _front_loaded(ctx: SuggestionContext) -> str:
    first_month = ctx.plan.allocation_plan[0].amount
    share = ctx.first_half_total / ctx.plan.amount_remaining * 100
    return (
        f"High urgency: save {_money(first_month)} next month. The first half of the plan "
        f"covers {share:.0f}% of the remaining amount."
    )


def _decreasing(ctx: SuggestionContext) -> str:
    return "Your surplus is trending down - monitor spending to stay on track."


def _increasing(ctx: SuggestionContext) -> str:
    return "Your surplus is trending up - great momentum toward this goal!"


def _optimize_expenses(ctx: SuggestionContext) -> str:
    excess = ctx.pattern.average_monthly_expense - ctx.pattern.average_monthly_income * EXPENSE_INCOME_SHARE
    return (
        f"Your expenses are above {EXPENSE_INCOME_SHARE * 100:.0f}% of your income. Cutting about "
        f"{_money(excess)}/month would bring them to {EXPENSE_INCOME_SHARE * 100:.0f}%."
    )


def _slipping(ctx: SuggestionContext) -> str:
    return (
        f"At your current savings rate this goal will take about "
        f"{ctx.feasibility.months_to_complete} months, longer than the "
        f"{ctx.plan.months_remaining} months planned."
    )


RULES: Tuple[Rule, ...] = (
    (lambda c: not c.feasibility.is_achievable, _shortfall),
    (
        lambda c: not c.feasibility.is_achievable
        and c.extension_months is not None
        and c.extension_months <= EXTENSION_MAX_MONTHS,
        _extension,
    ),
    (
        lambda c: c.feasibility.is_achievable and c.feasibility.surplus_ratio > HIGH_SURPLUS_USE,
        _uses_most_of_surplus,
    ),
    (
        lambda c: c.feasibility.is_achievable and c.feasibility.surplus_ratio < EASY_SURPLUS_USE,
        _very_achievable,
    ),
    (lambda c: c.feasibility.stability_score < BUFFER_STABILITY, _buffer),
    (lambda c: c.urgency >= HIGH_URGENCY and c.plan.amount_remaining > 0, _front_loaded),
    (lambda c: c.pattern.trend == "decreasing", _decreasing),
    (lambda c: c.pattern.trend == "increasing", _increasing),
    (
        lambda c: c.pattern.average_monthly_expense
        > c.pattern.average_monthly_income * EXPENSE_INCOME_SHARE,
        _optimize_expenses,
    ),
    (
        lambda c: c.feasibility.projected_completion_date is not None
        and c.feasibility.months_to_complete > c.plan.months_remaining + SLIP_TOLERANCE_MONTHS,
        _slipping,
    ),
)


def compose_suggestions(ctx: SuggestionContext) -> List[str]:
    return [message(ctx) for predicate, message in RULES if predicate(ctx)]
