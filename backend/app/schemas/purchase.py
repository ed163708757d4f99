from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

PurchaseStatus = Literal["active", "completed", "cancelled", "paused"]


class Account(BaseModel):
    id: str
    user_id: str
    name: Optional[str] = None
    type: Literal["income", "expense", "saving"]


class TransactionRecord(BaseModel):
    id: Optional[str] = None
    user_id: str
    date: date
    amount: float = Field(..., ge=0)
    account_id: str
    description: Optional[str] = None


class PurchaseAllocation(BaseModel):
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="YYYY-MM")
    amount: float
    allocated_at: datetime


class FuturePurchase(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    target_amount: float = Field(..., gt=0)
    current_saved: float = Field(0, ge=0)
    urgency: int = Field(3, ge=1, le=5)
    target_date: date
    recommended_monthly_savings: float = 0
    icon: str = "package"
    color: str = "#38bdf8"
    status: PurchaseStatus = "active"
    allocations: List[PurchaseAllocation] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None


class PurchaseCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    target_amount: float = Field(..., gt=0)
    urgency: int = Field(..., ge=1, le=5)
    target_date: date
    icon: Optional[str] = None
    color: Optional[str] = None


class PurchaseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    target_amount: Optional[float] = Field(None, gt=0)
    urgency: Optional[int] = Field(None, ge=1, le=5)
    target_date: Optional[date] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    status: Optional[PurchaseStatus] = None
    current_saved: Optional[float] = Field(None, ge=0)

    @field_validator(
        "name", "target_amount", "urgency", "target_date", "icon", "color", "status", "current_saved"
    )
    @classmethod
    def not_null(cls, value):
        # only description may be cleared with an explicit null
        if value is None:
            raise ValueError("must not be null")
        return value


class AllocateRequest(BaseModel):
    amount: float = Field(..., gt=0)
    month: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}$", description="YYYY-MM")
