"""
FastAPI Router for the Debt Stress Score.
"""
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Header, HTTPException

from debtfree.core.logger import get_logger_with_correlation
from debtfree.stress.schemas import StressScoreRequest, StressScoreResult
from debtfree.stress.service import calculate_stress_score

router = APIRouter(tags=["Stress Score"])


@router.post("/score", response_model=StressScoreResult)
def score_debts(
    data: StressScoreRequest,
    x_correlation_id: Optional[str] = Header(default=None)
) -> StressScoreResult:
    """
    Scores the debt portfolio from 0 (critical) to 100 (healthy).

    - **debts**: Current debts
    - **monthly_income**: Monthly net income

    **Returns:**
    - Score, grade and the factors behind it
    - Grade "N/A" when there are no debts or no income
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        logger.info(f"Scoring portfolio: debts={len(data.debts)}, income={data.monthly_income}")
        return calculate_stress_score(data.debts, data.monthly_income)
    except Exception as e:
        logger.error(f"Stress score error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error calculating stress score")
