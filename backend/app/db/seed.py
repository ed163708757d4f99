#!/usr/bin/env python3
"""
Synthetic household ledger generator.

Writes a JSON file the in-memory store can load (DATA_FILE):
accounts for one user, a monthly salary plus randomized spending over the
trailing months, and a couple of future purchase goals.

    python -m app.db.seed --months 8 --output seed_data.json
"""
import argparse
import calendar
import json
import logging
import random
from datetime import date, datetime, timezone

from app.core.logging_config import setup_logging
from app.utils.date_utils import add_months, shift_date

logger = logging.getLogger(__name__)

# ----------------------------
# CONFIGURABLE OPTIONS
# ----------------------------
USER_ID = "demo-user"
SALARY_AMOUNT = 4200.00           # Monthly salary on the income account
ENTRIES_PER_MONTH = 40            # Random expense transactions per month
OUTPUT_JSON = "seed_data.json"
# ----------------------------

ACCOUNTS = [
    {"id": "acc-salary", "name": "Salary", "type": "income"},
    {"id": "acc-side", "name": "Side gigs", "type": "income"},
    {"id": "acc-rent", "name": "Rent", "type": "expense"},
    {"id": "acc-food", "name": "Food", "type": "expense"},
    {"id": "acc-transport", "name": "Transportation", "type": "expense"},
    {"id": "acc-social", "name": "Social Life", "type": "expense"},
    {"id": "acc-household", "name": "Household", "type": "expense"},
    {"id": "acc-savings", "name": "Savings", "type": "saving"},
]

# Keep these weights as-is (they sum ~1). Rent and salary are injected explicitly.
CATEGORY_WEIGHTS = {
    "acc-food": 0.6,
    "acc-transport": 0.2,
    "acc-social": 0.12,
    "acc-household": 0.08,
}

RENT_AMOUNT = 1400.00


def choose_account(rng):
    """Choose an expense account using CATEGORY_WEIGHTS (handles any sum by normalizing)."""
    total = sum(CATEGORY_WEIGHTS.values())
    r = rng.random() * total
    cumulative = 0.0
    for account_id, weight in CATEGORY_WEIGHTS.items():
        cumulative += weight
        if r <= cumulative:
            return account_id
    return list(CATEGORY_WEIGHTS.keys())[0]


def random_amount(rng, account_id):
    if account_id == "acc-household":
        return rng.uniform(40, 250)
    if account_id == "acc-social":
        return rng.uniform(15, 120)
    if account_id == "acc-transport":
        return rng.uniform(5, 60)
    # a mix of small and medium grocery/food values
    return rng.choice([rng.uniform(5, 25), rng.uniform(25, 90)])


def generate_month(rng, year, month, user_id=USER_ID, entries_per_month=ENTRIES_PER_MONTH, until=None):
    """Transactions for a single month, skipping anything dated after `until`."""
    last_day = calendar.monthrange(year, month)[1]
    rows = [
        (date(year, month, rng.randint(1, 5)), SALARY_AMOUNT, "acc-salary"),
        (date(year, month, rng.randint(3, 10)), RENT_AMOUNT, "acc-rent"),
        (date(year, month, rng.randint(1, last_day)), 300.0, "acc-savings"),
    ]
    if rng.random() < 0.3:
        rows.append((date(year, month, rng.randint(1, last_day)), round(rng.uniform(100, 600), 2), "acc-side"))

    for _ in range(entries_per_month):
        account_id = choose_account(rng)
        day = rng.randint(1, last_day)
        rows.append((date(year, month, day), round(random_amount(rng, account_id), 2), account_id))

    return [
        {
            "user_id": user_id,
            "date": d.isoformat(),
            "amount": amount,
            "account_id": account_id,
        }
        for d, amount, account_id in sorted(rows)
        if until is None or d <= until
    ]


def generate_ledger(today=None, months=8, user_id=USER_ID, entries_per_month=ENTRIES_PER_MONTH, seed=None):
    """Ledger covering `months` calendar months ending with today's month."""
    rng = random.Random(seed)
    today = today or datetime.now(timezone.utc).date()

    transactions = []
    for offset in range(months - 1, -1, -1):
        year, month = add_months(today.year, today.month, -offset)
        logger.debug("Generating: %02d/%d", month, year)
        transactions.extend(generate_month(rng, year, month, user_id, entries_per_month, until=today))

    for i, tx in enumerate(transactions, start=1):
        tx["id"] = f"tx-{i}"

    created = datetime.now(timezone.utc).isoformat()
    purchases = [
        {
            "id": "fp-laptop",
            "user_id": user_id,
            "name": "New laptop",
            "target_amount": 1800.0,
            "current_saved": 250.0,
            "urgency": 4,
            "target_date": shift_date(today, 5).isoformat(),
            "icon": "laptop",
            "created_at": created,
            "updated_at": created,
        },
        {
            "id": "fp-trip",
            "user_id": user_id,
            "name": "Summer trip",
            "target_amount": 3500.0,
            "current_saved": 0.0,
            "urgency": 2,
            "target_date": shift_date(today, 10).isoformat(),
            "icon": "plane",
            "color": "#a855f7",
            "created_at": created,
            "updated_at": created,
        },
    ]

    return {
        "accounts": [dict(a, user_id=user_id) for a in ACCOUNTS],
        "transactions": transactions,
        "future_purchases": purchases,
    }


def write_json(ledger, output_file=OUTPUT_JSON):
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(ledger, f, indent=2)
    logger.info("%s generated: %d transactions", output_file, len(ledger["transactions"]))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a synthetic ledger for the in-memory store.")
    parser.add_argument("--months", type=int, default=8)
    parser.add_argument("--entries", type=int, default=ENTRIES_PER_MONTH)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", default=OUTPUT_JSON)
    args = parser.parse_args(argv)

    setup_logging()
    ledger = generate_ledger(months=args.months, entries_per_month=args.entries, seed=args.seed)
    write_json(ledger, args.output)


if __name__ == "__main__":
    main()
