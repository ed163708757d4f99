import json

from app.api.routes import load_spending_pattern
from app.db.seed import SALARY_AMOUNT, USER_ID, generate_ledger, main, write_json
from app.db.store import InMemoryStore
from savings.engine import analyze_purchase
from savings.models import PurchaseGoal

from conftest import TODAY


def test_ledger_covers_requested_months_up_to_today():
    ledger = generate_ledger(today=TODAY, months=8, seed=7)
    dates = sorted(tx["date"] for tx in ledger["transactions"])

    assert dates[0].startswith("2023-12")
    assert dates[-1] <= TODAY.isoformat()
    assert {a["type"] for a in ledger["accounts"]} == {"income", "expense", "saving"}
    assert len({tx["id"] for tx in ledger["transactions"]}) == len(ledger["transactions"])


def test_same_seed_same_transactions():
    first = generate_ledger(today=TODAY, seed=3)["transactions"]
    second = generate_ledger(today=TODAY, seed=3)["transactions"]
    assert first == second


def test_cli_writes_loadable_file(tmp_path):
    path = tmp_path / "cli.json"
    main(["--months", "3", "--entries", "5", "--seed", "1", "--output", str(path)])

    data = json.loads(path.read_text())
    assert len(data["future_purchases"]) == 2
    assert InMemoryStore.from_json(path).list_purchases(USER_ID)


def test_seeded_store_feeds_the_engine(tmp_path):
    path = tmp_path / "seed.json"
    write_json(generate_ledger(today=TODAY, months=8, seed=11), str(path))

    store = InMemoryStore.from_json(path)
    pattern = load_spending_pattern(store, USER_ID, TODAY)

    assert len(pattern.monthly_data) == 6
    assert pattern.average_monthly_income >= SALARY_AMOUNT
    assert pattern.average_monthly_expense > 0

    purchases = store.list_purchases(USER_ID)
    assert [p.id for p in purchases] == ["fp-laptop", "fp-trip"]

    for purchase in purchases:
        goal = PurchaseGoal(
            target_amount=purchase.target_amount,
            target_date=purchase.target_date,
            current_saved=purchase.current_saved,
            urgency=purchase.urgency,
        )
        result = analyze_purchase(goal, pattern, TODAY)
        assert len(result.allocation_plan) == result.analysis.months_remaining
