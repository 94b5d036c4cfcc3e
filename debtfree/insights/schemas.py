"""
Pydantic schemas for debt insights.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from debtfree.ledger.schemas import DebtPayload
from debtfree.payoff.schemas import PayoffStrategy


class InsightType(str, Enum):
    """Severity / tone of an insight, most urgent first."""
    CRITICAL = "critical"
    DANGER = "danger"
    WARN = "warn"
    SUCCESS = "success"
    OPPORTUNITY = "opportunity"
    INFO = "info"


class Insight(BaseModel):
    """A single heuristic recommendation."""
    type: InsightType
    icon: str
    title: str
    body: str

    model_config = ConfigDict(frozen=True)


class InsightRequest(DebtPayload):
    """Insight generation request payload."""
    monthly_income: float = Field(..., ge=0, allow_inf_nan=False, description="Monthly net income")
    extra_payment: float = Field(0.0, ge=0, allow_inf_nan=False, description="Extra paid every month")


class InsightList(BaseModel):
    """Insights plus the headline numbers they were derived from."""
    score: int
    best_strategy: PayoffStrategy
    insights: List[Insight]
