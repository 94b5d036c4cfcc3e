"""
FastAPI Router for debt insights.
"""
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import APIRouter, Header, HTTPException

from debtfree.core.logger import get_logger_with_correlation
from debtfree.insights.rules import insight_engine
from debtfree.insights.schemas import InsightList, InsightRequest
from debtfree.payoff.service import compare_strategies
from debtfree.stress.service import calculate_stress_score

router = APIRouter(tags=["Insights"])


@router.post("", response_model=InsightList)
def get_insights(
    data: InsightRequest,
    x_correlation_id: Optional[str] = Header(default=None)
) -> InsightList:
    """
    Evaluates the insight rules against the portfolio.

    - **debts**, **monthly_income**, **extra_payment**

    **Returns:**
    - Up to five insights, most urgent first
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        stress = calculate_stress_score(data.debts, data.monthly_income)
        comparison = compare_strategies(data.debts, data.extra_payment)
        insights = insight_engine.generate(
            data.debts, data.monthly_income, stress, comparison.results, data.extra_payment
        )
        logger.info(f"Insights ready: count={len(insights)}")
        return InsightList(score=stress.score, best_strategy=comparison.best, insights=insights)
    except ValueError as e:
        logger.warning(f"Insight validation error: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Insight error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error generating insights")


@router.get("/rules", response_model=Dict[str, Any])
def list_rules() -> Dict[str, Any]:
    """
    Exposes the active rule chain, in evaluation order.
    """
    rules: List[str] = [rule.name for rule in insight_engine.rules]
    return {
        "total_rules": len(rules),
        "max_insights": insight_engine.max_insights,
        "rules": rules
    }
