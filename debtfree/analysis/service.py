"""
Debt analysis orchestration.
Ledger -> {stress score, strategy runs} -> insights, computed from a single snapshot.
"""
from typing import List, Sequence

from debtfree.analysis.schemas import AnalysisReport, PortfolioSummary
from debtfree.core.logger import logger
from debtfree.insights.rules import generate_insights
from debtfree.ledger.schemas import Debt, DebtEstimate
from debtfree.payoff.service import build_action_plan, compare_strategies, estimate_payoff_months
from debtfree.stress.service import calculate_stress_score


def estimate_debts(debts: Sequence[Debt]) -> List[DebtEstimate]:
    return [
        DebtEstimate(debt=d, monthly_interest=d.monthly_interest, payoff_months=estimate_payoff_months(d))
        for d in debts
    ]


def build_analysis_report(debts: Sequence[Debt], monthly_income: float, extra_payment: float = 0.0) -> AnalysisReport:
    """
    Runs the whole pipeline for one ledger snapshot.
    Nothing is cached: every call recomputes from its inputs.
    """
    debts = tuple(debts)
    stress = calculate_stress_score(debts, monthly_income)
    comparison = compare_strategies(debts, extra_payment)
    insights = generate_insights(debts, monthly_income, stress, comparison.results, extra_payment)
    plan = build_action_plan(debts, comparison.best, extra_payment)

    total_emi = sum(d.emi for d in debts)
    summary = PortfolioSummary(
        total_outstanding=sum(d.balance for d in debts),
        monthly_emi=total_emi,
        active_loans=len(debts),
        annual_income=monthly_income * 12,
        free_cash_after_emi=monthly_income - total_emi
    )

    logger.info(
        f"Analysis completed: debts={len(debts)}, score={stress.score}, best={comparison.best.value}, "
        f"insights={len(insights)}"
    )

    return AnalysisReport(
        summary=summary,
        stress=stress,
        strategies=comparison,
        insights=insights,
        action_plan=plan,
        debts=estimate_debts(debts)
    )
