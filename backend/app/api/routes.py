import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.deps import get_current_user, get_store, get_today
from app.core.config import ANALYSIS_WINDOW_MONTHS
from app.db.store import FinanceStore
from app.schemas.analysis import PurchaseAnalysisResponse, SavingsAnalysisOut, SpendingPatternOut
from app.schemas.purchase import (
    AllocateRequest,
    FuturePurchase,
    PurchaseAllocation,
    PurchaseCreate,
    PurchaseUpdate,
)
from app.utils.date_utils import month_key, shift_date, start_of_month
from savings.engine import analyze_purchase, build_spending_pattern
from savings.models import PurchaseGoal, SpendingPattern, Transaction
from savings.planner import plan_savings

logger = logging.getLogger(__name__)

router = APIRouter()


def load_spending_pattern(store: FinanceStore, user_id: str, today: date) -> SpendingPattern:
    accounts = store.list_accounts(user_id)
    account_types = {a.id: a.type for a in accounts}

    start = start_of_month(shift_date(today, -ANALYSIS_WINDOW_MONTHS))
    records = store.list_transactions(user_id, start, today)
    transactions = [
        Transaction(date=r.date, amount=r.amount, account_id=r.account_id)
        for r in records
    ]
    return build_spending_pattern(transactions, account_types, today, ANALYSIS_WINDOW_MONTHS)


def recommended_savings(target_amount, target_date, current_saved, urgency, today) -> float:
    goal = PurchaseGoal(
        target_amount=target_amount,
        target_date=target_date,
        current_saved=current_saved,
        urgency=urgency,
    )
    return max(0.0, plan_savings(goal, today).recommended_monthly_savings)


def get_owned_purchase(store: FinanceStore, purchase_id: str, user_id: str) -> FuturePurchase:
    purchase = store.get_purchase(purchase_id, user_id)
    if purchase is None:
        logger.warning("purchase %s not found for user %s", purchase_id, user_id)
        raise HTTPException(status_code=404, detail="Purchase not found")
    return purchase


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/future-purchases/spending-analysis", response_model=SpendingPatternOut)
def spending_analysis(
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
    today: date = Depends(get_today),
):
    """
    Spending pattern over the trailing months, used to suggest a savings
    amount before a goal exists.
    """
    pattern = load_spending_pattern(store, user_id, today)
    return SpendingPatternOut.from_pattern(pattern)


@router.get("/future-purchases", response_model=List[FuturePurchase])
def list_purchases(
    status: Optional[str] = None,
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
):
    return store.list_purchases(user_id, status=status)


@router.post("/future-purchases", response_model=FuturePurchase, status_code=201)
def create_purchase(
    body: PurchaseCreate,
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
    today: date = Depends(get_today),
):
    fields = {
        "name": body.name.strip(),
        "description": (body.description or "").strip() or None,
        "target_amount": body.target_amount,
        "urgency": body.urgency,
        "target_date": body.target_date,
        "icon": body.icon or "package",
        "color": body.color or "#38bdf8",
        "status": "active",
        "current_saved": 0.0,
        "allocations": [],
        "recommended_monthly_savings": recommended_savings(
            body.target_amount, body.target_date, 0.0, body.urgency, today
        ),
    }
    purchase = store.create_purchase(user_id, fields)
    logger.info("created purchase %s for user %s", purchase.id, user_id)
    return purchase


@router.get("/future-purchases/{purchase_id}", response_model=FuturePurchase)
def get_purchase(
    purchase_id: str,
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
):
    return get_owned_purchase(store, purchase_id, user_id)


@router.patch("/future-purchases/{purchase_id}", response_model=FuturePurchase)
def update_purchase(
    purchase_id: str,
    body: PurchaseUpdate,
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
    today: date = Depends(get_today),
):
    current = get_owned_purchase(store, purchase_id, user_id)
    fields = body.model_dump(exclude_unset=True)

    if "name" in fields:
        fields["name"] = fields["name"].strip()
    if "description" in fields:
        fields["description"] = (fields["description"] or "").strip() or None

    if fields.keys() & {"target_amount", "target_date", "current_saved", "urgency"}:
        fields["recommended_monthly_savings"] = recommended_savings(
            fields.get("target_amount", current.target_amount),
            fields.get("target_date", current.target_date),
            fields.get("current_saved", current.current_saved),
            fields.get("urgency", current.urgency),
            today,
        )

    if fields.get("status") == "completed":
        fields["completed_at"] = datetime.now(timezone.utc)

    updated = store.update_purchase(purchase_id, user_id, fields)
    if updated is None:
        raise HTTPException(status_code=404, detail="Purchase not found")
    logger.info("updated purchase %s: %s", purchase_id, sorted(fields))
    return updated


@router.delete("/future-purchases/{purchase_id}", status_code=204)
def delete_purchase(
    purchase_id: str,
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
):
    if not store.delete_purchase(purchase_id, user_id):
        raise HTTPException(status_code=404, detail="Purchase not found")
    logger.info("deleted purchase %s", purchase_id)
    return Response(status_code=204)


@router.post("/future-purchases/{purchase_id}/allocate", response_model=FuturePurchase)
def allocate_savings(
    purchase_id: str,
    body: AllocateRequest,
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
    today: date = Depends(get_today),
):
    """
    Record money set aside for a purchase. The goal is marked completed once
    the saved amount reaches the target.
    """
    purchase = get_owned_purchase(store, purchase_id, user_id)
    now = datetime.now(timezone.utc)

    allocation = PurchaseAllocation(
        month=body.month or month_key(today),
        amount=body.amount,
        allocated_at=now,
    )
    current_saved = purchase.current_saved + body.amount
    is_completed = current_saved >= purchase.target_amount

    fields = {
        "current_saved": current_saved,
        "allocations": [*purchase.allocations, allocation],
        "recommended_monthly_savings": recommended_savings(
            purchase.target_amount, purchase.target_date, current_saved, purchase.urgency, today
        ),
        "status": "completed" if is_completed else purchase.status,
        "completed_at": now if is_completed else purchase.completed_at,
    }
    updated = store.update_purchase(purchase_id, user_id, fields)
    if updated is None:
        raise HTTPException(status_code=404, detail="Purchase not found")

    logger.info("allocated %.2f to purchase %s (saved %.2f)", body.amount, purchase_id, current_saved)
    return updated


@router.get("/future-purchases/{purchase_id}/analysis", response_model=PurchaseAnalysisResponse)
def purchase_analysis(
    purchase_id: str,
    user_id: str = Depends(get_current_user),
    store: FinanceStore = Depends(get_store),
    today: date = Depends(get_today),
):
    """
    Savings plan for a purchase goal, checked against the user's recent
    income and spending.
    """
    purchase = get_owned_purchase(store, purchase_id, user_id)
    pattern = load_spending_pattern(store, user_id, today)

    goal = PurchaseGoal(
        target_amount=purchase.target_amount,
        target_date=purchase.target_date,
        current_saved=purchase.current_saved,
        urgency=purchase.urgency,
    )
    result = analyze_purchase(goal, pattern, today)

    return PurchaseAnalysisResponse(
        purchase=purchase,
        analysis=SavingsAnalysisOut.from_analysis(result),
        spending_pattern=SpendingPatternOut.from_pattern(pattern),
    )
