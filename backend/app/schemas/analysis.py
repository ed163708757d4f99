from dataclasses import asdict
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.purchase import FuturePurchase
from savings.models import PurchaseAnalysis, SpendingPattern


class CamelModel(BaseModel):
    """Serialized with camelCase keys; accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MonthBucketOut(CamelModel):
    month: str
    income: float
    expense: float
    surplus: float


class SpendingPatternOut(CamelModel):
    average_monthly_income: float
    average_monthly_expense: float
    average_monthly_surplus: float
    monthly_variance: float
    trend: Literal["increasing", "stable", "decreasing"]
    monthly_data: List[MonthBucketOut]

    @classmethod
    def from_pattern(cls, pattern: SpendingPattern) -> "SpendingPatternOut":
        return cls.model_validate(asdict(pattern))


class AllocationPlanEntryOut(CamelModel):
    month: int
    amount: float


class SavingsAnalysisOut(CamelModel):
    recommended_monthly_savings: float
    months_remaining: int
    amount_remaining: float
    progress_percent: float
    is_achievable: bool
    confidence_level: float
    average_monthly_surplus: float
    suggestions: List[str]
    projected_completion_date: Optional[date] = None
    risk_level: Literal["low", "medium", "high"]
    allocation_plan: List[AllocationPlanEntryOut]

    @classmethod
    def from_analysis(cls, result: PurchaseAnalysis) -> "SavingsAnalysisOut":
        data = asdict(result.analysis)
        data["allocation_plan"] = [asdict(e) for e in result.allocation_plan]
        return cls.model_validate(data)


class PurchaseAnalysisResponse(CamelModel):
    purchase: FuturePurchase
    analysis: SavingsAnalysisOut
    spending_pattern: SpendingPatternOut
