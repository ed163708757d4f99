import logging
from datetime import date
from typing import Optional

from app.utils.date_utils import month_diff
from savings.models import AllocationPlanEntry, PurchaseGoal, SavingsPlan

logger = logging.getLogger(__name__)

MIN_URGENCY = 1
MAX_URGENCY = 5

# Share of the remaining amount saved during the first half of the plan.
# None means an even split across all months.
FRONT_LOAD_PERCENTAGE = {
    1: None,
    2: 0.55,
    3: 0.55,
    4: 0.6,
    5: 0.7,
}


def clamp_urgency(urgency: int) -> int:
    return min(MAX_URGENCY, max(MIN_URGENCY, int(urgency)))


def front_load_percentage(urgency: int) -> Optional[float]:
    return FRONT_LOAD_PERCENTAGE[clamp_urgency(urgency)]


def months_until(target_date: date, now: date) -> int:
    """Calendar months left until the target date, never less than one."""
    return max(1, month_diff(now, target_date))


def split_months(months_remaining: int) -> int:
    """
    Number of months in the front-loaded half of the plan.

    A single-month plan is all front half. For an odd count the middle month
    belongs to the back half, so per-month front amounts stay above the back.
    """
    return max(1, months_remaining // 2)


def plan_savings(goal: PurchaseGoal, now: date) -> SavingsPlan:
    """
    Spread the amount still needed over the months left until the target date.

    Urgency 1 saves the same amount every month. Higher urgencies put a fixed
    share of the remaining amount into the first half of the months, so the
    cushion is built early. The recommended monthly amount is what the plan
    asks for next month.
    """
    months_remaining = months_until(goal.target_date, now)
    amount_remaining = goal.target_amount - goal.current_saved
    base_monthly = amount_remaining / months_remaining

    percentage = front_load_percentage(goal.urgency)
    if percentage is None:
        plan = [AllocationPlanEntry(month=i, amount=base_monthly)
                for i in range(1, months_remaining + 1)]
        return SavingsPlan(
            recommended_monthly_savings=base_monthly,
            months_remaining=months_remaining,
            amount_remaining=amount_remaining,
            first_half_months=months_remaining,
            allocation_plan=plan,
        )

    first_half_months = split_months(months_remaining)
    second_half_months = months_remaining - first_half_months

    if second_half_months == 0:
        first_half_amount = amount_remaining
    else:
        first_half_amount = amount_remaining * percentage
    second_half_amount = amount_remaining - first_half_amount

    first_monthly = first_half_amount / first_half_months
    plan = [AllocationPlanEntry(month=i, amount=first_monthly)
            for i in range(1, first_half_months + 1)]

    if second_half_months:
        second_monthly = second_half_amount / second_half_months
        plan.extend(
            AllocationPlanEntry(month=i, amount=second_monthly)
            for i in range(first_half_months + 1, months_remaining + 1)
        )

    logger.debug(
        "plan: %d months, %.2f remaining, urgency %s front-loads %.0f%%",
        months_remaining, amount_remaining, goal.urgency, percentage * 100,
    )

    return SavingsPlan(
        recommended_monthly_savings=first_monthly,
        months_remaining=months_remaining,
        amount_remaining=amount_remaining,
        first_half_months=first_half_months,
        allocation_plan=plan,
    )
