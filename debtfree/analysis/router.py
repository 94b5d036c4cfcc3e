"""
FastAPI Router for the full debt analysis.
"""
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Header, HTTPException

from debtfree.analysis.schemas import AnalysisReport, AnalysisRequest
from debtfree.analysis.service import build_analysis_report
from debtfree.core.logger import audit_log, get_logger_with_correlation

router = APIRouter(tags=["Analysis"])


@router.post("", response_model=AnalysisReport)
def analyze(
    data: AnalysisRequest,
    x_correlation_id: Optional[str] = Header(default=None)
) -> AnalysisReport:
    """
    Runs the complete pipeline: stress score, four strategy projections,
    insights and the recommended action plan.

    - **debts**: Current debts
    - **monthly_income**: Monthly net income
    - **extra_payment**: Extra paid every month
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        logger.info(f"Starting analysis: debts={len(data.debts)}, income={data.monthly_income}")
        report = build_analysis_report(data.debts, data.monthly_income, data.extra_payment)
    except ValueError as e:
        logger.warning(f"Analysis validation error: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Analysis error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error processing analysis")

    audit_log(
        action="debt_analysis",
        user="anonymous",
        resource="portfolio",
        details={
            "correlation_id": correlation_id,
            "debts": len(data.debts),
            "score": report.stress.score,
            "grade": report.stress.grade.value,
            "best_strategy": report.strategies.best.value
        }
    )

    return report
