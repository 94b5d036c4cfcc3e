"""
Payoff simulator.
Month-by-month amortization of a debt portfolio with strategy-driven extra payments.
"""
import math
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from debtfree.core.config import settings
from debtfree.core.logger import logger
from debtfree.core.utils import format_compact, round_half_up
from debtfree.ledger.schemas import Debt
from debtfree.payoff.schemas import (
    ActionPlan,
    ActionPlanStep,
    Milestone,
    PayoffStrategy,
    SimulationOutcome,
    StrategyComparison,
    StrategyResult,
    TimelinePoint,
)

MAX_MONTHS = 600
TIMELINE_HORIZON = 360
SAMPLE_EVERY = 3
# Balances at or below this are treated as paid off
SETTLED_BALANCE = 0.5

PERCENT_MILESTONES = ((25, "25% paid off"), (50, "Halfway!"), (75, "75% done"))
MIN_MILESTONES = 4
COMPLETION_LABEL = "DEBT FREE!"

ALLOCATING_STRATEGIES = (PayoffStrategy.AVALANCHE, PayoffStrategy.SNOWBALL, PayoffStrategy.HYBRID)


class _Position:
    """Working state of one debt during a simulation."""

    __slots__ = ("debt", "remaining", "cleared")

    def __init__(self, debt: Debt):
        self.debt = debt
        self.remaining = debt.balance
        self.cleared = False

    @property
    def label(self) -> str:
        return self.debt.name or f"Debt #{self.debt.id}"


def _avalanche_key(position: _Position) -> float:
    return -position.debt.rate


def _snowball_key(position: _Position) -> float:
    return position.remaining


def _hybrid_key(position: _Position) -> float:
    return -(position.debt.rate * position.remaining)


# Baseline has no entry: it never allocates extra money
PRIORITY_KEYS: Dict[PayoffStrategy, Callable[[_Position], float]] = {
    PayoffStrategy.AVALANCHE: _avalanche_key,
    PayoffStrategy.SNOWBALL: _snowball_key,
    PayoffStrategy.HYBRID: _hybrid_key,
}


def _allocate_extra(positions: List[_Position], priority: Callable[[_Position], float], pool: float) -> float:
    """Pours the extra pool into debts in priority order. Returns the amount applied."""
    applied = 0.0
    # sorted() is stable, so ties keep ledger order
    for position in sorted(positions, key=priority):
        if pool <= 0:
            break
        if position.remaining <= 0:
            continue
        payment = min(pool, position.remaining)
        position.remaining -= payment
        pool -= payment
        applied += payment
    return applied


def simulate_payoff(
    debts: Sequence[Debt],
    strategy: PayoffStrategy,
    extra_payment: float = 0.0
) -> StrategyResult:
    """
    Projects the portfolio month by month until every balance is settled or
    MAX_MONTHS is reached.

    Each month every open debt accrues rate/1200 interest and receives its EMI.
    An EMI below the interest grows the balance. The extra payment (ignored by
    baseline) then goes to debts in the strategy's priority order.
    """
    strategy = PayoffStrategy(strategy)
    if not debts:
        return StrategyResult(strategy=strategy, months=0, total_interest=0, outcome=SimulationOutcome.EMPTY)

    priority = PRIORITY_KEYS.get(strategy)
    extra = extra_payment if priority is not None else 0.0

    positions = [_Position(debt) for debt in debts]
    start_total = sum(p.remaining for p in positions)

    month = 0
    total_interest = 0.0
    timeline: List[TimelinePoint] = []
    milestones: List[Milestone] = []

    while any(p.remaining > SETTLED_BALANCE for p in positions) and month < MAX_MONTHS:
        month += 1
        month_interest = 0.0
        month_principal = 0.0

        for p in positions:
            if p.remaining <= 0:
                continue
            interest = p.remaining * p.debt.rate / 1200
            principal = min(p.debt.emi - interest, p.remaining)
            p.remaining = max(0.0, p.remaining - principal)
            month_interest += interest
            month_principal += principal
        total_interest += month_interest

        if extra > 0:
            month_principal += _allocate_extra(positions, priority, extra)

        total_remaining = sum(p.remaining for p in positions)
        pct_paid = (start_total - total_remaining) / start_total * 100

        # A threshold only fires while it would be the next event; early payoffs use up its slot
        for slot, (pct, label) in enumerate(PERCENT_MILESTONES):
            if len(milestones) == slot and pct_paid >= pct:
                milestones.append(Milestone(month=month, label=label, pct=pct))

        for p in positions:
            if p.remaining <= 0 and not p.cleared:
                p.cleared = True
                milestones.append(Milestone(month=month, label=f"{p.label} cleared!", pct=round_half_up(pct_paid)))

        if month <= TIMELINE_HORIZON and (month % SAMPLE_EVERY == 0 or total_remaining <= SETTLED_BALANCE):
            timeline.append(TimelinePoint(
                month=month,
                balance=round_half_up(total_remaining),
                interest=round_half_up(month_interest),
                principal=round_half_up(month_principal)
            ))

    if len(milestones) < MIN_MILESTONES:
        milestones.append(Milestone(month=month, label=COMPLETION_LABEL, pct=100))

    settled = all(p.remaining <= SETTLED_BALANCE for p in positions)
    outcome = SimulationOutcome.CLEARED if settled else SimulationOutcome.CAP_REACHED
    if outcome == SimulationOutcome.CAP_REACHED:
        logger.warning(f"Simulation hit the {MAX_MONTHS}-month cap: strategy={strategy.value}")

    logger.debug(
        f"Simulation finished: strategy={strategy.value}, extra={extra}, months={month}, "
        f"interest={round_half_up(total_interest)}"
    )

    return StrategyResult(
        strategy=strategy,
        months=month,
        total_interest=round_half_up(total_interest),
        timeline=timeline,
        milestones=milestones,
        outcome=outcome
    )


def pick_best_strategy(results: Mapping[PayoffStrategy, StrategyResult]) -> PayoffStrategy:
    """
    Lowest total interest among the allocating strategies.
    Ties go to the first checked, in avalanche -> snowball -> hybrid order.
    """
    best = ALLOCATING_STRATEGIES[0]
    for strategy in ALLOCATING_STRATEGIES[1:]:
        if results[strategy].total_interest < results[best].total_interest:
            best = strategy
    return best


def compare_strategies(debts: Sequence[Debt], extra_payment: float = 0.0) -> StrategyComparison:
    """Runs baseline (minimum payments only) and every allocating strategy."""
    runs: Dict[PayoffStrategy, StrategyResult] = {PayoffStrategy.BASELINE: simulate_payoff(debts, PayoffStrategy.BASELINE)}
    for strategy in ALLOCATING_STRATEGIES:
        runs[strategy] = simulate_payoff(debts, strategy, extra_payment)

    baseline = runs[PayoffStrategy.BASELINE]
    best = pick_best_strategy(runs)
    savings = {s: baseline.total_interest - runs[s].total_interest for s in ALLOCATING_STRATEGIES}

    logger.info(
        f"Strategies compared: debts={len(debts)}, extra={extra_payment}, best={best.value}, "
        f"saved={savings[best]}"
    )

    return StrategyComparison(
        baseline=baseline,
        avalanche=runs[PayoffStrategy.AVALANCHE],
        snowball=runs[PayoffStrategy.SNOWBALL],
        hybrid=runs[PayoffStrategy.HYBRID],
        extra_payment=extra_payment,
        best=best,
        interest_saved=savings[best],
        months_saved=baseline.months - runs[best].months,
        savings=savings
    )


def build_action_plan(debts: Sequence[Debt], strategy: PayoffStrategy, extra_payment: float = 0.0) -> ActionPlan:
    """
    Orders the debts by the strategy's priority on today's balances.
    The first debt receives the extra payment on top of its EMI.
    """
    strategy = PayoffStrategy(strategy)
    positions = [_Position(debt) for debt in debts]
    priority = PRIORITY_KEYS.get(strategy)
    if priority is not None:
        positions = sorted(positions, key=priority)

    gets_extra = priority is not None and extra_payment > 0
    steps = []
    for rank, position in enumerate(positions, start=1):
        receives_extra = gets_extra and rank == 1
        allocation = f"EMI + {format_compact(extra_payment, settings.CURRENCY_SYMBOL)}" if receives_extra else "Standard EMI"
        steps.append(ActionPlanStep(rank=rank, debt=position.debt, allocation=allocation, receives_extra=receives_extra))

    result = simulate_payoff(debts, strategy, extra_payment)
    return ActionPlan(
        strategy=strategy,
        extra_payment=extra_payment,
        months=result.months,
        total_interest=result.total_interest,
        steps=steps,
        milestones=result.milestones
    )


def estimate_payoff_months(debt: Debt) -> Optional[int]:
    """
    Rough months-to-clear under minimum payments, holding this month's interest fixed.
    None when the debt has no balance, no rate or no EMI.
    """
    if debt.balance <= 0 or debt.rate <= 0 or debt.emi <= 0:
        return None
    return math.ceil(debt.balance / max(1.0, debt.emi - debt.monthly_interest))
