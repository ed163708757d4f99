from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_store, get_today
from app.db.store import InMemoryStore
from app.main import app
from app.schemas.purchase import Account, FuturePurchase, TransactionRecord
from app.utils.date_utils import add_months
from savings.models import MonthBucket, SpendingPattern

TODAY = date(2024, 7, 15)
USER = "user-1"
OTHER_USER = "user-2"


def bucket(month, income, expense):
    return MonthBucket(month=month, income=income, expense=expense, surplus=income - expense)


def steady_buckets(income=3000.0, expense=2000.0, months=6, end=TODAY):
    rows = []
    for offset in range(months - 1, -1, -1):
        year, month = add_months(end.year, end.month, -offset)
        rows.append(bucket(f"{year:04d}-{month:02d}", income, expense))
    return rows


def make_pattern(income=3000.0, expense=2000.0, variance=0.0, trend="stable"):
    return SpendingPattern(
        average_monthly_income=income,
        average_monthly_expense=expense,
        average_monthly_surplus=income - expense,
        monthly_variance=variance,
        trend=trend,
        monthly_data=[],
    )


@pytest.fixture
def store():
    accounts = [
        Account(id="acc-salary", user_id=USER, name="Salary", type="income"),
        Account(id="acc-bills", user_id=USER, name="Bills", type="expense"),
        Account(id="acc-savings", user_id=USER, name="Savings", type="saving"),
        Account(id="acc-other-income", user_id=OTHER_USER, type="income"),
    ]

    transactions = []
    for offset in range(6):
        year, month = add_months(TODAY.year, TODAY.month, -offset)
        transactions += [
            TransactionRecord(user_id=USER, date=date(year, month, 1), amount=3000, account_id="acc-salary"),
            TransactionRecord(user_id=USER, date=date(year, month, 10), amount=2000, account_id="acc-bills"),
            TransactionRecord(user_id=USER, date=date(year, month, 12), amount=500, account_id="acc-savings"),
        ]
    # inside the queried range but one month before the analysis window
    transactions.append(
        TransactionRecord(user_id=USER, date=date(2024, 1, 20), amount=9000, account_id="acc-salary")
    )
    transactions.append(
        TransactionRecord(user_id=OTHER_USER, date=date(2024, 7, 1), amount=99999, account_id="acc-other-income")
    )

    created = datetime(2024, 6, 1, tzinfo=timezone.utc)
    purchases = [
        FuturePurchase(
            id="fp-1",
            user_id=USER,
            name="Used car",
            target_amount=6000,
            current_saved=0,
            urgency=5,
            target_date=date(2025, 1, 15),
            created_at=created,
            updated_at=created,
        ),
        FuturePurchase(
            id="fp-other",
            user_id=OTHER_USER,
            name="Not yours",
            target_amount=100,
            urgency=1,
            target_date=date(2024, 12, 1),
            created_at=created,
            updated_at=created,
        ),
    ]
    return InMemoryStore(accounts=accounts, transactions=transactions, purchases=purchases)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    return {"X-User-Id": USER}
