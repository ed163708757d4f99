from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional

AccountType = Literal["income", "expense", "saving"]
Trend = Literal["increasing", "stable", "decreasing"]
RiskLevel = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class Transaction:
    date: date
    amount: float
    account_id: str


@dataclass(frozen=True)
class MonthBucket:
    month: str  # YYYY-MM
    income: float
    expense: float
    surplus: float


@dataclass(frozen=True)
class SpendingPattern:
    average_monthly_income: float
    average_monthly_expense: float
    average_monthly_surplus: float
    monthly_variance: float
    trend: Trend
    monthly_data: List[MonthBucket] = field(default_factory=list)


@dataclass(frozen=True)
class PurchaseGoal:
    target_amount: float
    target_date: date
    current_saved: float
    urgency: int


@dataclass(frozen=True)
class AllocationPlanEntry:
    month: int  # months from now, 1-indexed
    amount: float


@dataclass(frozen=True)
class SavingsPlan:
    recommended_monthly_savings: float
    months_remaining: int
    amount_remaining: float
    first_half_months: int
    allocation_plan: List[AllocationPlanEntry]


@dataclass(frozen=True)
class Feasibility:
    is_achievable: bool
    surplus_ratio: float
    stability_score: float
    confidence_level: float
    risk_level: RiskLevel
    months_to_complete: Optional[int]
    projected_completion_date: Optional[date]


@dataclass(frozen=True)
class SavingsAnalysis:
    recommended_monthly_savings: float
    months_remaining: int
    amount_remaining: float
    progress_percent: float
    is_achievable: bool
    confidence_level: float
    average_monthly_surplus: float
    suggestions: List[str]
    projected_completion_date: Optional[date]
    risk_level: RiskLevel


@dataclass(frozen=True)
class PurchaseAnalysis:
    analysis: SavingsAnalysis
    allocation_plan: List[AllocationPlanEntry]
