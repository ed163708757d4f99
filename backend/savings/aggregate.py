import logging
from datetime import date
from typing import Iterable, List, Mapping

import pandas as pd

from savings.models import MonthBucket, Transaction

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 6

# only these account types move the surplus
SURPLUS_ACCOUNT_TYPES = ("income", "expense")


def month_window(now: date, window_months: int = DEFAULT_WINDOW_MONTHS) -> pd.PeriodIndex:
    """Monthly periods ending at now's month (inclusive), oldest first."""
    end = pd.Period(year=now.year, month=now.month, freq="M")
    return pd.period_range(end=end, periods=max(1, window_months), freq="M")


def aggregate_monthly(
    transactions: Iterable[Transaction],
    account_types: Mapping[str, str],
    now: date,
    window_months: int = DEFAULT_WINDOW_MONTHS,
) -> List[MonthBucket]:
    """
    Bucket transactions into one income/expense/surplus row per calendar month
    of the trailing window.

    Months with no activity are still emitted (as zeros). Transactions whose
    month falls outside the window, or whose account is a saving account or
    is not classified at all, are dropped.
    """
    periods = month_window(now, window_months)
    totals = pd.DataFrame(0.0, index=periods, columns=list(SURPLUS_ACCOUNT_TYPES))

    rows = [
        {
            "date": tx.date,
            "amount": float(tx.amount),
            "kind": account_types.get(tx.account_id),
        }
        for tx in transactions
    ]

    if rows:
        df = pd.DataFrame(rows)
        df["month"] = pd.to_datetime(df["date"]).dt.to_period("M")

        for kind in SURPLUS_ACCOUNT_TYPES:
            sums = df.loc[df["kind"] == kind].groupby("month")["amount"].sum()
            totals[kind] = sums.reindex(periods, fill_value=0.0).astype(float)

    buckets = [
        MonthBucket(
            month=str(period),
            income=float(row["income"]),
            expense=float(row["expense"]),
            surplus=float(row["income"] - row["expense"]),
        )
        for period, row in totals.iterrows()
    ]

    logger.debug("aggregated %d transactions into %d monthly buckets", len(rows), len(buckets))
    return buckets
