import math


def round_half_up(value: float) -> int:
    """
    Rounds to the nearest integer, halves away from negative infinity.
    Matches how amounts are rounded for display (2.5 -> 3, -2.5 -> -2).
    """
    return int(math.floor(value + 0.5))


def group_indian(n: int) -> str:
    """
    Groups digits the Indian way: last three, then pairs.
    1234567 -> 12,34,567
    """
    sign = "-" if n < 0 else ""
    digits = str(abs(n))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join(pairs + [tail])


def format_currency(amount: float, symbol: str = "₹") -> str:
    """Full amount, rounded to whole units: ₹12,34,567"""
    return f"{symbol}{group_indian(round_half_up(amount))}"


def format_compact(amount: float, symbol: str = "₹") -> str:
    """
    Short amount for labels and chart axes.
    Crore (1e7) -> Cr, lakh (1e5) -> L, thousand -> K.
    """
    if amount >= 1e7:
        return f"{symbol}{amount / 1e7:.2f} Cr"
    if amount >= 1e5:
        return f"{symbol}{amount / 1e5:.2f} L"
    if amount >= 1e3:
        return f"{symbol}{amount / 1e3:.1f}K"
    return f"{symbol}{round_half_up(amount)}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def format_duration(months: int) -> str:
    """
    Month count as years and months.
    30 -> 2y 6m, 7 -> 7m
    """
    years, rest = divmod(months, 12)
    if years > 0:
        return f"{years}y {rest}m"
    return f"{rest}m"
