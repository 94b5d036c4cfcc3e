"""
FastAPI Router for ledger endpoints.
The service keeps no ledger of its own; clients send their debts on every call.
"""
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Header

from debtfree.analysis.service import estimate_debts
from debtfree.core.logger import get_logger_with_correlation
from debtfree.ledger.schemas import DebtPayload, LedgerValidationResponse, SampleLedgerResponse
from debtfree.ledger.service import SAMPLE_EXTRA_PAYMENT, SAMPLE_MONTHLY_INCOME, sample_ledger

router = APIRouter(tags=["Ledger"])


@router.get("/sample", response_model=SampleLedgerResponse)
def get_sample_ledger() -> SampleLedgerResponse:
    """
    Returns a sample household portfolio (home, car, personal loan and credit card)
    with matching income and extra payment, for first-time users.
    """
    return SampleLedgerResponse(
        debts=list(sample_ledger().snapshot()),
        monthly_income=SAMPLE_MONTHLY_INCOME,
        extra_payment=SAMPLE_EXTRA_PAYMENT
    )


@router.post("/validate", response_model=LedgerValidationResponse)
def validate_ledger(
    data: DebtPayload,
    x_correlation_id: Optional[str] = Header(default=None)
) -> LedgerValidationResponse:
    """
    Validates a ledger and annotates each debt with a standalone payoff estimate.

    - **debts**: Debts with unique ids and non-negative amounts

    **Returns:**
    - Normalized debts with monthly interest and estimated months to clear
    - Ids of debts whose EMI does not cover their interest
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)
    logger.info(f"Validating ledger: debts={len(data.debts)}")

    return LedgerValidationResponse(
        debts=estimate_debts(data.debts),
        total_balance=sum(d.balance for d in data.debts),
        total_emi=sum(d.emi for d in data.debts),
        non_amortizing=[d.id for d in data.debts if d.balance > 0 and not d.amortizes]
    )
