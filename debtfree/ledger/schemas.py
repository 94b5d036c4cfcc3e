"""
Pydantic schemas for the debt ledger.
Enforces non-negative, finite amounts at construction time.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DebtType(str, Enum):
    """Classification of a liability."""
    SECURED = "secured"
    UNSECURED = "unsecured"
    REVOLVING = "revolving"


class Debt(BaseModel):
    """A single outstanding liability."""
    id: int = Field(..., ge=1, description="Stable identifier, never reused")
    name: str = Field(default="", max_length=120, description="Display label")
    balance: float = Field(..., ge=0, le=1e12, description="Outstanding principal")
    rate: float = Field(..., ge=0, le=1000, description="Nominal annual rate (%), e.g. 8.5")
    emi: float = Field(..., ge=0, le=1e12, description="Scheduled monthly installment")
    type: DebtType = Field(default=DebtType.UNSECURED, description="Debt classification")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @property
    def monthly_interest(self) -> float:
        """Interest accrued in one month on the current balance."""
        return self.balance * self.rate / 1200

    @property
    def amortizes(self) -> bool:
        """False when the EMI cannot cover the monthly interest."""
        return self.emi > self.monthly_interest


class DebtPayload(BaseModel):
    """Ledger request payload shared by every analysis endpoint."""
    debts: List[Debt] = Field(default_factory=list, max_length=50, description="Current debts, in display order")

    @field_validator("debts")
    @classmethod
    def validate_unique_ids(cls, v: List[Debt]) -> List[Debt]:
        seen = set()
        for debt in v:
            if debt.id in seen:
                raise ValueError(f"Duplicate debt id: {debt.id}")
            seen.add(debt.id)
        return v


class DebtEstimate(BaseModel):
    """A debt with its standalone payoff estimate (minimum payments only)."""
    debt: Debt
    monthly_interest: float = Field(..., description="Interest accrued this month")
    payoff_months: Optional[int] = Field(None, description="Approximate months to clear, if computable")


class LedgerValidationResponse(BaseModel):
    """Normalized ledger returned by the validation endpoint."""
    debts: List[DebtEstimate]
    total_balance: float
    total_emi: float
    non_amortizing: List[int] = Field(..., description="Ids of debts whose EMI does not cover interest")


class SampleLedgerResponse(BaseModel):
    """Starter data for a new session."""
    debts: List[Debt]
    monthly_income: float
    extra_payment: float
