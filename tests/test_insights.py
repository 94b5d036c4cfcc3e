"""
Unit tests for the Insight Rule Engine.
Validates rule triggers, evaluation order and truncation.
"""
import pytest

from debtfree.insights.rules import (
    DEFAULT_RULES,
    GETTING_STARTED,
    InsightContext,
    InsightEngine,
    InsightRule,
    generate_insights,
)
from debtfree.insights.schemas import Insight, InsightType
from debtfree.ledger.schemas import Debt
from debtfree.payoff.schemas import PayoffStrategy, SimulationOutcome, StrategyResult
from debtfree.payoff.service import compare_strategies
from debtfree.stress.service import calculate_stress_score


def run_rules(debts, income, extra):
    score = calculate_stress_score(debts, income)
    strategies = compare_strategies(debts, extra).results
    return generate_insights(debts, income, score, strategies, extra)


def titles(insights):
    return [i.title for i in insights]


@pytest.mark.parametrize("debts, income", [
    ((), 125000),
    ((Debt(id=1, balance=1000, rate=10, emi=100),), 0),
])
def test_getting_started_short_circuit(debts, income):
    insights = run_rules(debts, income, 0)

    assert insights == [GETTING_STARTED]
    assert insights[0].type == InsightType.INFO


def test_sample_portfolio_insights(sample_debts):
    insights = run_rules(sample_debts, 125000, 5000)

    assert [i.type for i in insights] == [
        InsightType.CRITICAL,
        InsightType.DANGER,
        InsightType.SUCCESS,
        InsightType.OPPORTUNITY,
        InsightType.INFO,
    ]
    assert "55.2%" in insights[0].body
    assert "Credit Card (Axis) carries interest above 18%" in insights[1].body
    assert "₹1,45,000" in insights[1].body
    assert "₹5,075" in insights[1].body
    # round(13.5) thousand rounds half up
    assert "₹14,000/mo" in insights[3].body
    assert "2 debts" in insights[4].body
    assert "10.1%" in insights[4].body


def test_best_strategy_insight_reports_savings(sample_debts):
    comparison = compare_strategies(sample_debts, 5000)
    score = calculate_stress_score(sample_debts, 125000)

    insights = generate_insights(sample_debts, 125000, score, comparison.results, 5000)

    best = next(i for i in insights if i.icon == "🎯")
    assert best.title == f"{comparison.best.value.capitalize()} Saves You The Most"
    assert f"{comparison.months_saved} months earlier" in best.body


def test_toxic_cost_of_delay_uses_first_toxic_rate():
    """Combined toxic balance priced at the first toxic debt's rate: 200000 * 24 / 1200."""
    debts = (
        Debt(id=1, name="Card A", balance=100000, rate=24, emi=5000),
        Debt(id=2, name="Card B", balance=100000, rate=36, emi=5000),
    )

    insights = run_rules(debts, 500000, 0)

    toxic = next(i for i in insights if i.title == "Toxic Debt Alert")
    assert toxic.body.startswith("Card A, Card B carry interest above 18%")
    assert "₹2,00,000" in toxic.body
    assert "costs you ₹4,000 in interest" in toxic.body


def test_healthy_portfolio():
    debts = (Debt(id=1, name="Home", balance=100000, rate=8, emi=5000),)

    insights = run_rules(debts, 100000, 0)

    assert titles(insights) == ["Untapped Payoff Potential", "Strong Financial Position"]
    assert "₹65,000/mo" in insights[0].body
    assert "Score of 100" in insights[1].body


def test_no_headroom_insight_when_extra_already_high():
    debts = (Debt(id=1, name="Home", balance=100000, rate=8, emi=5000),)

    insights = run_rules(debts, 100000, 40000)

    assert "Untapped Payoff Potential" not in titles(insights)


def test_thin_buffer_warning():
    debts = (Debt(id=1, name="Business Loan", balance=1000000, rate=10, emi=30000),)

    insights = run_rules(debts, 50000, 12000)

    assert titles(insights)[0] == "EMI Overload Detected"
    buffer = next(i for i in insights if i.title == "Emergency Buffer Thin")
    assert buffer.type == InsightType.WARN
    assert "16.0%" in buffer.body
    assert "₹90,000" in buffer.body


def test_high_leverage_warning():
    debts = (Debt(id=1, name="Home", balance=5000000, rate=8, emi=45000),)

    insights = run_rules(debts, 100000, 0)

    leverage = next(i for i in insights if i.title == "High Debt-to-Income Ratio")
    assert "4.2x" in leverage.body


def test_consolidation_needs_high_average_rate():
    """Two debts well above average, but the average itself is below 10%."""
    debts = (
        Debt(id=1, name="Home", balance=5000000, rate=7, emi=60000),
        Debt(id=2, name="Loan A", balance=100000, rate=12, emi=5000),
        Debt(id=3, name="Loan B", balance=100000, rate=12, emi=5000),
    )

    insights = run_rules(debts, 300000, 0)

    assert "Consolidation Opportunity" not in titles(insights)


def _result(strategy: PayoffStrategy, interest: int, months: int) -> StrategyResult:
    return StrategyResult(strategy=strategy, months=months, total_interest=interest, outcome=SimulationOutcome.CLEARED)


def test_best_strategy_tie_names_avalanche(sample_debts):
    strategies = {
        PayoffStrategy.BASELINE: _result(PayoffStrategy.BASELINE, 1000, 40),
        PayoffStrategy.AVALANCHE: _result(PayoffStrategy.AVALANCHE, 800, 30),
        PayoffStrategy.SNOWBALL: _result(PayoffStrategy.SNOWBALL, 800, 28),
        PayoffStrategy.HYBRID: _result(PayoffStrategy.HYBRID, 800, 29),
    }
    score = calculate_stress_score(sample_debts, 125000)

    ctx = InsightContext(sample_debts, 125000, score, strategies, 5000)

    assert ctx.best_strategy == PayoffStrategy.AVALANCHE
    assert ctx.interest_saved == 200
    assert ctx.months_saved == 10


def test_no_savings_no_strategy_insight(sample_debts):
    insights = run_rules(sample_debts, 125000, 0)

    assert not any(i.icon == "🎯" for i in insights)


def test_engine_truncates_in_evaluation_order(sample_debts):
    def always(name):
        return InsightRule(
            name,
            lambda c: True,
            lambda c: Insight(type=InsightType.INFO, icon="i", title=name, body=name)
        )

    engine = InsightEngine(rules=[always(f"R{n}") for n in range(7)], max_insights=5)
    score = calculate_stress_score(sample_debts, 125000)
    strategies = compare_strategies(sample_debts, 0).results

    insights = engine.generate(sample_debts, 125000, score, strategies, 0)

    assert titles(insights) == ["R0", "R1", "R2", "R3", "R4"]


def test_default_rule_order():
    assert [r.name for r in DEFAULT_RULES] == [
        "EMI_OVERLOAD",
        "TOXIC_DEBT",
        "BEST_STRATEGY",
        "THIN_BUFFER",
        "PAYOFF_HEADROOM",
        "CONSOLIDATION",
        "STRONG_POSITION",
        "HIGH_LEVERAGE",
    ]


def test_rules_are_deterministic(sample_debts):
    assert run_rules(sample_debts, 125000, 5000) == run_rules(sample_debts, 125000, 5000)
