"""
Pydantic schemas for the full debt analysis report.
"""
from typing import List

from pydantic import BaseModel, Field

from debtfree.insights.schemas import Insight
from debtfree.ledger.schemas import DebtEstimate, DebtPayload
from debtfree.payoff.schemas import ActionPlan, StrategyComparison
from debtfree.stress.schemas import StressScoreResult


class AnalysisRequest(DebtPayload):
    """Full analysis request payload."""
    monthly_income: float = Field(..., ge=0, allow_inf_nan=False, description="Monthly net income")
    extra_payment: float = Field(0.0, ge=0, allow_inf_nan=False, description="Extra paid every month")


class PortfolioSummary(BaseModel):
    """Headline portfolio figures."""
    total_outstanding: float
    monthly_emi: float
    active_loans: int
    annual_income: float
    free_cash_after_emi: float


class AnalysisReport(BaseModel):
    """Everything the dashboard needs, computed from one snapshot."""
    summary: PortfolioSummary
    stress: StressScoreResult
    strategies: StrategyComparison
    insights: List[Insight]
    action_plan: ActionPlan
    debts: List[DebtEstimate]
