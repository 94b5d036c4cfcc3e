"""
Pydantic schemas for the debt stress score.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from debtfree.ledger.schemas import DebtPayload


class StressGrade(str, Enum):
    """Score band. NOT_APPLICABLE means insufficient data, not a real score."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    STRESSED = "Stressed"
    CRITICAL = "Critical"
    NOT_APPLICABLE = "N/A"


class StressFactors(BaseModel):
    """Derived inputs of the score. Always recomputed, never edited."""
    emi_to_income: float = Field(0.0, description="Total EMI as % of monthly income")
    debt_to_annual_income: float = Field(0.0, description="Total balance / annual income")
    weighted_rate: float = Field(0.0, description="Balance-weighted average rate (%)")
    high_rate_ratio: float = Field(0.0, description="% of balance carried above 15% p.a.")
    num_debts: int = Field(0, ge=0)
    total_emi: float = Field(0.0, ge=0)
    total_balance: float = Field(0.0, ge=0)

    model_config = ConfigDict(frozen=True)


class ScoreDeduction(BaseModel):
    """One factor band that reduced the score."""
    factor: str = Field(..., description="Factor name")
    value: float = Field(..., description="Observed factor value")
    points: int = Field(..., gt=0, description="Points deducted")


class StressScoreResult(BaseModel):
    """Composite 0-100 score plus the factors behind it."""
    score: int = Field(..., ge=0, le=100, description="Debt Stress Score (0-100)")
    grade: StressGrade
    factors: StressFactors
    deductions: List[ScoreDeduction] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_applicable(self) -> bool:
        return self.grade != StressGrade.NOT_APPLICABLE


class StressScoreRequest(DebtPayload):
    """Stress score request payload."""
    monthly_income: float = Field(..., ge=0, allow_inf_nan=False, description="Monthly net income")
