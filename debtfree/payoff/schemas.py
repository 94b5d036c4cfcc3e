"""
Pydantic schemas for payoff simulation.
Enforces strict type checking and boundary constraints.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from debtfree.ledger.schemas import Debt, DebtPayload


class PayoffStrategy(str, Enum):
    """Extra-payment allocation policy."""
    BASELINE = "baseline"
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"
    HYBRID = "hybrid"


class SimulationOutcome(str, Enum):
    """Terminal state of a simulation run."""
    CLEARED = "cleared"
    CAP_REACHED = "cap_reached"
    EMPTY = "empty"


class TimelinePoint(BaseModel):
    """Portfolio snapshot at a sampled month. Amounts are rounded."""
    month: int = Field(..., ge=1, description="Month number")
    balance: int = Field(..., description="Total remaining balance")
    interest: int = Field(..., description="Interest accrued this month")
    principal: int = Field(..., description="Principal repaid this month, extra included")

    model_config = ConfigDict(frozen=True)


class Milestone(BaseModel):
    """A payoff event: a percentage threshold, a cleared debt, or completion."""
    month: int = Field(..., ge=0)
    label: str
    pct: int = Field(..., description="Share of the starting balance repaid (%)")

    model_config = ConfigDict(frozen=True)


class StrategyResult(BaseModel):
    """Projection of a single strategy run."""
    strategy: PayoffStrategy
    months: int = Field(..., ge=0, description="Months until debt-free or the cap")
    total_interest: int = Field(..., description="Total interest paid, rounded")
    timeline: List[TimelinePoint] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)
    outcome: SimulationOutcome

    model_config = ConfigDict(frozen=True)


class StrategyComparison(BaseModel):
    """All four strategy runs side by side with the winner."""
    baseline: StrategyResult
    avalanche: StrategyResult
    snowball: StrategyResult
    hybrid: StrategyResult
    extra_payment: float
    best: PayoffStrategy
    interest_saved: int = Field(..., description="Baseline interest minus best strategy interest")
    months_saved: int = Field(..., description="Baseline months minus best strategy months")
    savings: Dict[PayoffStrategy, int] = Field(..., description="Interest saved versus baseline, per strategy")

    @property
    def results(self) -> Dict[PayoffStrategy, StrategyResult]:
        return {
            PayoffStrategy.BASELINE: self.baseline,
            PayoffStrategy.AVALANCHE: self.avalanche,
            PayoffStrategy.SNOWBALL: self.snowball,
            PayoffStrategy.HYBRID: self.hybrid,
        }


class ActionPlanStep(BaseModel):
    """One debt in the recommended payment order."""
    rank: int = Field(..., ge=1)
    debt: Debt
    allocation: str = Field(..., description="What to pay on this debt each month")
    receives_extra: bool


class ActionPlan(BaseModel):
    """Ordered repayment plan for a strategy."""
    strategy: PayoffStrategy
    extra_payment: float
    months: int
    total_interest: int
    steps: List[ActionPlanStep]
    milestones: List[Milestone]


class SimulationRequest(DebtPayload):
    """Single-strategy simulation request payload."""
    strategy: PayoffStrategy = Field(..., description="Allocation policy")
    extra_payment: float = Field(0.0, ge=0, allow_inf_nan=False, description="Extra paid every month")


class ComparisonRequest(DebtPayload):
    """Strategy comparison request payload."""
    extra_payment: float = Field(0.0, ge=0, allow_inf_nan=False, description="Extra paid every month")


class ActionPlanRequest(ComparisonRequest):
    """Action plan request payload. The best strategy is used when none is given."""
    strategy: Optional[PayoffStrategy] = Field(None, description="Allocation policy")
