"""
Insight Rule Engine.
Turns the stress score and strategy runs into a short, priority-ordered list of advice.
"""
from functools import cached_property
from typing import Callable, List, Mapping, Optional, Sequence

from debtfree.core.config import settings
from debtfree.core.logger import logger
from debtfree.core.utils import format_currency, format_duration, format_percent, round_half_up
from debtfree.ledger.schemas import Debt
from debtfree.payoff.schemas import PayoffStrategy, StrategyResult
from debtfree.payoff.service import pick_best_strategy
from debtfree.insights.schemas import Insight, InsightType
from debtfree.stress.schemas import StressScoreResult

TOXIC_RATE = 18.0
EMI_OVERLOAD_PCT = 50.0
THIN_BUFFER_PCT = 20.0
SURPLUS_PCT = 40.0
SAFE_BUFFER_SHARE = 0.3
CONSOLIDATION_SPREAD = 3.0
CONSOLIDATION_MIN_AVG_RATE = 10.0
CONSOLIDATION_MIN_DEBTS = 2
STRONG_SCORE = 70
LEVERAGE_ALERT = 3.0

GETTING_STARTED = Insight(
    type=InsightType.INFO,
    icon="💡",
    title="Add your debts to get started",
    body="Enter your loans and income to receive personalized insights."
)


def _money(amount: float) -> str:
    return format_currency(amount, settings.CURRENCY_SYMBOL)


class InsightContext:
    """Read-only inputs of one evaluation, with the derived figures rules share."""

    def __init__(
        self,
        debts: Sequence[Debt],
        income: float,
        score: StressScoreResult,
        strategies: Mapping[PayoffStrategy, StrategyResult],
        extra_payment: float
    ):
        self.debts = debts
        self.income = income
        self.score = score
        self.factors = score.factors
        self.strategies = strategies
        self.extra_payment = extra_payment

    @cached_property
    def toxic_debts(self) -> List[Debt]:
        return [d for d in self.debts if d.rate > TOXIC_RATE]

    @cached_property
    def best_strategy(self) -> PayoffStrategy:
        return pick_best_strategy(self.strategies)

    @cached_property
    def interest_saved(self) -> int:
        return self.strategies[PayoffStrategy.BASELINE].total_interest - self.strategies[self.best_strategy].total_interest

    @cached_property
    def months_saved(self) -> int:
        return self.strategies[PayoffStrategy.BASELINE].months - self.strategies[self.best_strategy].months

    @cached_property
    def remaining_income(self) -> float:
        return self.income - self.factors.total_emi - self.extra_payment

    @cached_property
    def free_income_pct(self) -> float:
        return self.remaining_income / self.income * 100

    @cached_property
    def suggested_extra(self) -> int:
        return round_half_up((self.remaining_income - self.income * SAFE_BUFFER_SHARE) / 1000) * 1000

    @cached_property
    def spread_debts(self) -> List[Debt]:
        return [d for d in self.debts if d.rate > self.factors.weighted_rate + CONSOLIDATION_SPREAD]


class InsightRule:
    """A named predicate paired with the builder of the insight it produces."""

    def __init__(
        self,
        name: str,
        applies: Callable[[InsightContext], bool],
        build: Callable[[InsightContext], Insight]
    ):
        self.name = name
        self.applies = applies
        self.build = build

    def evaluate(self, ctx: InsightContext) -> Optional[Insight]:
        return self.build(ctx) if self.applies(ctx) else None


def _emi_overload(ctx: InsightContext) -> Insight:
    return Insight(
        type=InsightType.CRITICAL,
        icon="🚨",
        title="EMI Overload Detected",
        body=(
            f"Your EMIs consume {format_percent(ctx.factors.emi_to_income)} of income, well above the safe "
            f"limit of 40%. This leaves critically thin margins for emergencies. Consider restructuring or "
            f"consolidating high-rate debts immediately."
        )
    )


def _toxic_debt(ctx: InsightContext) -> Insight:
    toxic = ctx.toxic_debts
    names = ", ".join(d.name for d in toxic)
    verb = "carry" if len(toxic) > 1 else "carries"
    total = sum(d.balance for d in toxic)
    # Cost of delay applies the first toxic debt's rate to the whole toxic balance
    monthly_cost = total * toxic[0].rate / 1200
    return Insight(
        type=InsightType.DANGER,
        icon="🔥",
        title="Toxic Debt Alert",
        body=(
            f"{names} {verb} interest above {TOXIC_RATE:g}%, totaling {_money(total)}. Every month delayed "
            f"costs you {_money(monthly_cost)} in interest. This is the single biggest drain on your wealth."
        )
    )


def _best_strategy(ctx: InsightContext) -> Insight:
    best = ctx.best_strategy.value
    return Insight(
        type=InsightType.SUCCESS,
        icon="🎯",
        title=f"{best.capitalize()} Saves You The Most",
        body=(
            f"With just {_money(ctx.extra_payment)}/month extra, the {best} strategy saves you "
            f"{_money(ctx.interest_saved)} in interest and gets you debt-free {ctx.months_saved} months earlier. "
            f"That's {format_duration(ctx.months_saved)} of financial freedom gained."
        )
    )


def _thin_buffer(ctx: InsightContext) -> Insight:
    return Insight(
        type=InsightType.WARN,
        icon="⚠️",
        title="Emergency Buffer Thin",
        body=(
            f"After EMIs and extra payments, only {format_percent(ctx.free_income_pct)} of income remains "
            f"({_money(ctx.remaining_income)}/mo). Financial planners recommend keeping at least 20% free. "
            f"Consider building a 3-month emergency fund of {_money(ctx.factors.total_emi * 3)} before "
            f"aggressive repayment."
        )
    )


def _payoff_headroom(ctx: InsightContext) -> Insight:
    return Insight(
        type=InsightType.OPPORTUNITY,
        icon="💰",
        title="Untapped Payoff Potential",
        body=(
            f"You have {_money(ctx.remaining_income)}/mo after all payments. You could safely increase extra "
            f"payments to {_money(ctx.suggested_extra)}/mo while keeping 30% income buffer. This would "
            f"dramatically accelerate your debt-free date."
        )
    )


def _consolidation(ctx: InsightContext) -> Insight:
    return Insight(
        type=InsightType.INFO,
        icon="🔄",
        title="Consolidation Opportunity",
        body=(
            f"You have {len(ctx.spread_debts)} debts with rates significantly above your weighted average of "
            f"{format_percent(ctx.factors.weighted_rate)}. A balance transfer or consolidation loan at a lower "
            f"rate could simplify payments and reduce total interest."
        )
    )


def _strong_position(ctx: InsightContext) -> Insight:
    return Insight(
        type=InsightType.SUCCESS,
        icon="✅",
        title="Strong Financial Position",
        body=(
            f"Your Debt Stress Score of {ctx.score.score} indicates healthy debt management. Stay the course: "
            f"your debt structure is sustainable and you're well-positioned to accelerate payoff with even "
            f"modest extra payments."
        )
    )


def _high_leverage(ctx: InsightContext) -> Insight:
    return Insight(
        type=InsightType.WARN,
        icon="📊",
        title="High Debt-to-Income Ratio",
        body=(
            f"Your total debt is {ctx.factors.debt_to_annual_income:.1f}x your annual income. Lenders typically "
            f"flag ratios above 3x. This may affect your ability to get new credit at favorable rates. Focus on "
            f"reducing the principal aggressively."
        )
    )


# Evaluation order is the display order: alerts before opportunities
DEFAULT_RULES: List[InsightRule] = [
    InsightRule("EMI_OVERLOAD", lambda c: c.factors.emi_to_income > EMI_OVERLOAD_PCT, _emi_overload),
    InsightRule("TOXIC_DEBT", lambda c: len(c.toxic_debts) > 0, _toxic_debt),
    InsightRule("BEST_STRATEGY", lambda c: c.interest_saved > 0, _best_strategy),
    InsightRule("THIN_BUFFER", lambda c: c.free_income_pct < THIN_BUFFER_PCT, _thin_buffer),
    InsightRule(
        "PAYOFF_HEADROOM",
        lambda c: c.free_income_pct > SURPLUS_PCT and c.suggested_extra > c.extra_payment,
        _payoff_headroom
    ),
    InsightRule(
        "CONSOLIDATION",
        lambda c: len(c.spread_debts) >= CONSOLIDATION_MIN_DEBTS and c.factors.weighted_rate > CONSOLIDATION_MIN_AVG_RATE,
        _consolidation
    ),
    InsightRule("STRONG_POSITION", lambda c: c.score.score >= STRONG_SCORE, _strong_position),
    InsightRule("HIGH_LEVERAGE", lambda c: c.factors.debt_to_annual_income > LEVERAGE_ALERT, _high_leverage),
]


class InsightEngine:
    """
    Deterministic rule chain.
    Every rule is checked in order and may add one insight; only the first
    max_insights survive.
    """

    def __init__(self, rules: Optional[List[InsightRule]] = None, max_insights: int = settings.MAX_INSIGHTS):
        self.rules: List[InsightRule] = list(rules) if rules is not None else list(DEFAULT_RULES)
        self.max_insights = max_insights

    def generate(
        self,
        debts: Sequence[Debt],
        income: float,
        score: StressScoreResult,
        strategies: Mapping[PayoffStrategy, StrategyResult],
        extra_payment: float = 0.0
    ) -> List[Insight]:
        if not debts or income <= 0:
            return [GETTING_STARTED]

        ctx = InsightContext(debts, income, score, strategies, extra_payment)
        insights: List[Insight] = []
        for rule in self.rules:
            insight = rule.evaluate(ctx)
            if insight is not None:
                insights.append(insight)
                logger.debug(f"Insight rule triggered: {rule.name}")

        logger.info(f"Insights generated: triggered={len(insights)}, returned={min(len(insights), self.max_insights)}")
        return insights[:self.max_insights]


# Singleton engine instance
insight_engine = InsightEngine()


def generate_insights(
    debts: Sequence[Debt],
    income: float,
    score: StressScoreResult,
    strategies: Mapping[PayoffStrategy, StrategyResult],
    extra_payment: float = 0.0
) -> List[Insight]:
    """Runs the default rule chain."""
    return insight_engine.generate(debts, income, score, strategies, extra_payment)
