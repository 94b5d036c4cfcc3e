"""
Unit tests for the Debt Stress Score.
Validates band tables, grading and the golden sample portfolio.
"""
import pytest

from debtfree.ledger.schemas import Debt
from debtfree.stress.schemas import StressGrade
from debtfree.stress.service import (
    COMPLEXITY_BANDS,
    EMI_BURDEN_BANDS,
    LEVERAGE_BANDS,
    RATE_BANDS,
    TOXIC_DEBT_BANDS,
    band_deduction,
    calculate_stress_score,
    grade_for,
)


def test_sample_portfolio_golden_score(sample_debts):
    """EMI 55.2% (-40), leverage 2.78x (-12), rate 10.12% (-7), 4 debts (-5)."""
    result = calculate_stress_score(sample_debts, 125000)

    assert result.score == 36
    assert result.grade == StressGrade.CRITICAL
    assert result.is_applicable
    assert {d.factor: d.points for d in result.deductions} == {
        "emi_burden": 40,
        "leverage": 12,
        "weighted_rate": 7,
        "complexity": 5,
    }


def test_sample_portfolio_factors(sample_debts):
    factors = calculate_stress_score(sample_debts, 125000).factors

    assert factors.total_emi == 69000
    assert factors.total_balance == 4165000
    assert factors.num_debts == 4
    assert factors.emi_to_income == pytest.approx(55.2)
    assert factors.debt_to_annual_income == pytest.approx(4165000 / 1500000)
    assert factors.weighted_rate == pytest.approx(42150000 / 4165000)
    assert factors.high_rate_ratio == pytest.approx(145000 / 4165000 * 100)


@pytest.mark.parametrize("debts, income", [
    ((), 125000),
    ((Debt(id=1, balance=1000, rate=10, emi=100),), 0),
])
def test_not_applicable_sentinel(debts, income):
    result = calculate_stress_score(debts, income)

    assert result.score == 0
    assert result.grade == StressGrade.NOT_APPLICABLE
    assert not result.is_applicable
    assert result.factors.total_balance == 0
    assert result.deductions == []


def test_healthy_portfolio_scores_full_marks():
    debts = (Debt(id=1, name="Home", balance=100000, rate=8, emi=5000),)

    result = calculate_stress_score(debts, 100000)

    assert result.score == 100
    assert result.grade == StressGrade.EXCELLENT


def test_zero_total_balance_has_zero_rates():
    debts = (Debt(id=1, balance=0, rate=30, emi=1000),)

    result = calculate_stress_score(debts, 10000)

    assert result.factors.weighted_rate == 0
    assert result.factors.high_rate_ratio == 0
    assert result.score == 100


def test_score_is_clamped_at_zero():
    """Every factor in its worst band deducts 115 points in total."""
    debts = tuple(Debt(id=i, balance=2000000, rate=30, emi=10000) for i in range(1, 7))

    result = calculate_stress_score(debts, 100000)

    assert sum(d.points for d in result.deductions) == 115
    assert result.score == 0
    assert result.grade == StressGrade.CRITICAL


@pytest.mark.parametrize("bands, value, expected", [
    (EMI_BURDEN_BANDS, 56, 40),
    (EMI_BURDEN_BANDS, 55, 30),
    (EMI_BURDEN_BANDS, 25.01, 10),
    (EMI_BURDEN_BANDS, 15.1, 3),
    (EMI_BURDEN_BANDS, 15, 0),
    (LEVERAGE_BANDS, 6.5, 25),
    (LEVERAGE_BANDS, 2.5, 5),
    (LEVERAGE_BANDS, 1, 0),
    (RATE_BANDS, 24.5, 22),
    (RATE_BANDS, 16, 7),
    (RATE_BANDS, 10, 0),
    (TOXIC_DEBT_BANDS, 100, 18),
    (TOXIC_DEBT_BANDS, 30, 12),
    (TOXIC_DEBT_BANDS, 10, 0),
    (COMPLEXITY_BANDS, 6, 10),
    (COMPLEXITY_BANDS, 4, 5),
    (COMPLEXITY_BANDS, 3, 0),
])
def test_band_deduction_takes_most_severe_band_only(bands, value, expected):
    """Bands are exclusive lower bounds and never accumulate."""
    assert band_deduction(value, bands) == expected


@pytest.mark.parametrize("score, expected", [
    (100, StressGrade.EXCELLENT),
    (80, StressGrade.EXCELLENT),
    (79, StressGrade.GOOD),
    (65, StressGrade.GOOD),
    (64, StressGrade.STRESSED),
    (45, StressGrade.STRESSED),
    (44, StressGrade.CRITICAL),
    (0, StressGrade.CRITICAL),
])
def test_grade_boundaries(score: int, expected: StressGrade):
    assert grade_for(score) == expected


@pytest.mark.parametrize("income", [1, 1000, 50000, 125000, 10000000])
def test_score_always_within_bounds(sample_debts, income: float):
    result = calculate_stress_score(sample_debts, income)

    assert 0 <= result.score <= 100
