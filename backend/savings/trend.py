import logging
from typing import List, Sequence

import numpy as np

from savings.models import MonthBucket, SpendingPattern

logger = logging.getLogger(__name__)

TREND_MIN_MONTHS = 3
TREND_THRESHOLD_PERCENT = 10.0


def valid_months(buckets: Sequence[MonthBucket]) -> List[MonthBucket]:
    """Months that saw any income or expense activity."""
    return [b for b in buckets if b.income > 0 or b.expense > 0]


def classify_trend(months: Sequence[MonthBucket]) -> str:
    """
    Compare average surplus of the later half of the months against the
    earlier half. With an odd count the extra month goes to the later half.
    """
    if len(months) < TREND_MIN_MONTHS:
        return "stable"

    split = len(months) // 2
    first_avg = float(np.mean([m.surplus for m in months[:split]]))
    second_avg = float(np.mean([m.surplus for m in months[split:]]))

    change_percent = (second_avg - first_avg) / abs(first_avg or 1) * 100
    if change_percent > TREND_THRESHOLD_PERCENT:
        return "increasing"
    if change_percent < -TREND_THRESHOLD_PERCENT:
        return "decreasing"
    return "stable"


def analyze_pattern(buckets: Sequence[MonthBucket]) -> SpendingPattern:
    months = valid_months(buckets)
    month_count = max(1, len(months))

    total_income = sum(m.income for m in months)
    total_expense = sum(m.expense for m in months)
    total_surplus = total_income - total_expense

    # population std-dev (ddof=0) of the monthly surplus
    if len(months) > 1:
        monthly_variance = float(np.std([m.surplus for m in months]))
    else:
        monthly_variance = 0.0

    pattern = SpendingPattern(
        average_monthly_income=total_income / month_count,
        average_monthly_expense=total_expense / month_count,
        average_monthly_surplus=total_surplus / month_count,
        monthly_variance=monthly_variance,
        trend=classify_trend(months),
        monthly_data=list(buckets),
    )

    logger.debug(
        "spending pattern over %d active months: surplus=%.2f variance=%.2f trend=%s",
        len(months), pattern.average_monthly_surplus, monthly_variance, pattern.trend,
    )
    return pattern
