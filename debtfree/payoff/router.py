"""
FastAPI Router for payoff simulation endpoints.
"""
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Header, HTTPException

from debtfree.core.logger import get_logger_with_correlation
from debtfree.payoff.schemas import (
    ActionPlan,
    ActionPlanRequest,
    ComparisonRequest,
    SimulationRequest,
    StrategyComparison,
    StrategyResult,
)
from debtfree.payoff.service import build_action_plan, compare_strategies, simulate_payoff

router = APIRouter(tags=["Payoff"])


@router.post("/simulate", response_model=StrategyResult)
def simulate(
    data: SimulationRequest,
    x_correlation_id: Optional[str] = Header(default=None)
) -> StrategyResult:
    """
    Projects month-by-month payoff under one strategy.

    - **strategy**: baseline, avalanche, snowball or hybrid
    - **extra_payment**: Extra paid every month (ignored by baseline)

    **Returns:**
    - Months to debt-free (600 at most), total interest
    - Quarterly balance timeline and milestones
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        logger.info(f"Starting simulation: strategy={data.strategy.value}, debts={len(data.debts)}")
        return simulate_payoff(data.debts, data.strategy, data.extra_payment)
    except ValueError as e:
        logger.warning(f"Simulation validation error: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Simulation error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error processing simulation")


@router.post("/compare", response_model=StrategyComparison)
def compare(
    data: ComparisonRequest,
    x_correlation_id: Optional[str] = Header(default=None)
) -> StrategyComparison:
    """
    Runs all four strategies and picks the one paying the least interest.
    Baseline always runs on minimum payments only.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        logger.info(f"Comparing strategies: debts={len(data.debts)}, extra={data.extra_payment}")
        return compare_strategies(data.debts, data.extra_payment)
    except ValueError as e:
        logger.warning(f"Comparison validation error: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Comparison error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error comparing strategies")


@router.post("/plan", response_model=ActionPlan)
def plan(
    data: ActionPlanRequest,
    x_correlation_id: Optional[str] = Header(default=None)
) -> ActionPlan:
    """
    Builds the ordered repayment plan. Uses the best strategy when none is given.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        strategy = data.strategy or compare_strategies(data.debts, data.extra_payment).best
        logger.info(f"Building action plan: strategy={strategy.value}")
        return build_action_plan(data.debts, strategy, data.extra_payment)
    except ValueError as e:
        logger.warning(f"Action plan validation error: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Action plan error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error building action plan")
