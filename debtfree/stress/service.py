"""
Debt Stress Score calculator.
Scores a debt portfolio against income using banded deductions per factor.
"""
from typing import Callable, List, Sequence, Tuple

from debtfree.core.logger import logger
from debtfree.core.utils import round_half_up
from debtfree.ledger.schemas import Debt
from debtfree.stress.schemas import ScoreDeduction, StressFactors, StressGrade, StressScoreResult

HIGH_RATE_THRESHOLD = 15.0

# (threshold, points) ordered most severe first; a factor takes the first band it exceeds
EMI_BURDEN_BANDS: Tuple[Tuple[float, int], ...] = ((55, 40), (45, 30), (35, 20), (25, 10), (15, 3))
LEVERAGE_BANDS: Tuple[Tuple[float, int], ...] = ((6, 25), (4, 18), (2.5, 12), (1, 5))
RATE_BANDS: Tuple[Tuple[float, int], ...] = ((24, 22), (16, 14), (10, 7))
TOXIC_DEBT_BANDS: Tuple[Tuple[float, int], ...] = ((40, 18), (25, 12), (10, 5))
COMPLEXITY_BANDS: Tuple[Tuple[float, int], ...] = ((5, 10), (3, 5))

FACTOR_BANDS: Tuple[Tuple[str, Callable[[StressFactors], float], Tuple[Tuple[float, int], ...]], ...] = (
    ("emi_burden", lambda f: f.emi_to_income, EMI_BURDEN_BANDS),
    ("leverage", lambda f: f.debt_to_annual_income, LEVERAGE_BANDS),
    ("weighted_rate", lambda f: f.weighted_rate, RATE_BANDS),
    ("toxic_debt", lambda f: f.high_rate_ratio, TOXIC_DEBT_BANDS),
    ("complexity", lambda f: f.num_debts, COMPLEXITY_BANDS),
)

GRADE_FLOORS: Tuple[Tuple[int, StressGrade], ...] = (
    (80, StressGrade.EXCELLENT),
    (65, StressGrade.GOOD),
    (45, StressGrade.STRESSED),
)


def band_deduction(value: float, bands: Sequence[Tuple[float, int]]) -> int:
    """Points for the most severe band strictly exceeded by value, 0 if none."""
    for threshold, points in bands:
        if value > threshold:
            return points
    return 0


def grade_for(score: int) -> StressGrade:
    for floor, grade in GRADE_FLOORS:
        if score >= floor:
            return grade
    return StressGrade.CRITICAL


def compute_factors(debts: Sequence[Debt], monthly_income: float) -> StressFactors:
    """Aggregates the ledger into score factors. Requires monthly_income > 0."""
    total_emi = sum(d.emi for d in debts)
    total_balance = sum(d.balance for d in debts)

    if total_balance > 0:
        weighted_rate = sum(d.rate * d.balance for d in debts) / total_balance
        high_rate_balance = sum(d.balance for d in debts if d.rate > HIGH_RATE_THRESHOLD)
        high_rate_ratio = high_rate_balance / total_balance * 100
    else:
        weighted_rate = 0.0
        high_rate_ratio = 0.0

    return StressFactors(
        emi_to_income=total_emi / monthly_income * 100,
        debt_to_annual_income=total_balance / (monthly_income * 12),
        weighted_rate=weighted_rate,
        high_rate_ratio=high_rate_ratio,
        num_debts=len(debts),
        total_emi=total_emi,
        total_balance=total_balance
    )


def calculate_stress_score(debts: Sequence[Debt], monthly_income: float) -> StressScoreResult:
    """
    Computes the Debt Stress Score (0-100, higher is healthier).

    Each of the five factors (EMI burden, leverage, weighted rate, toxic debt share,
    number of debts) deducts at most once, using its most severe matching band.
    An empty ledger or non-positive income yields score 0 with grade N/A.
    """
    if not debts or monthly_income <= 0:
        return StressScoreResult(score=0, grade=StressGrade.NOT_APPLICABLE, factors=StressFactors())

    factors = compute_factors(debts, monthly_income)

    score = 100
    deductions: List[ScoreDeduction] = []
    for name, read, bands in FACTOR_BANDS:
        value = read(factors)
        points = band_deduction(value, bands)
        if points:
            score -= points
            deductions.append(ScoreDeduction(factor=name, value=value, points=points))

    score = max(0, min(100, round_half_up(score)))
    grade = grade_for(score)

    logger.info(
        f"Stress score calculated: score={score}, grade={grade.value}, "
        f"emi_to_income={factors.emi_to_income:.1f}, debts={factors.num_debts}"
    )

    return StressScoreResult(score=score, grade=grade, factors=factors, deductions=deductions)
