"""Fixed-rate currency conversion and display formatting."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple

USD_TO_INR = 83.5
INR_PER_GBP = 108

CURRENCY_SYMBOLS = {"USD": "$", "INR": "₹"}


def _round_whole(value: float) -> int:
    """Round half away from zero, the way the display layer expects."""
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _group_western(digits: str) -> str:
    return f"{int(digits):,}"


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: float, currency: str = "USD") -> str:
    """Format with no decimals, e.g. "$1,234" or "₹12,34,567"."""
    if currency not in CURRENCY_SYMBOLS:
        raise ValueError(f"Unsupported display currency: {currency}")
    whole = _round_whole(value)
    digits = str(abs(whole))
    grouped = _group_indian(digits) if currency == "INR" else _group_western(digits)
    sign = "-" if whole < 0 else ""
    return f"{sign}{CURRENCY_SYMBOLS[currency]}{grouped}"


def format_axis(value: float, currency: str = "USD") -> str:
    """Compact chart axis label."""
    symbol = CURRENCY_SYMBOLS[currency]
    sign = "-" if value < 0 else ""
    value = abs(value)
    if value >= 1_000_000:
        return f"{sign}{symbol}{value / 1_000_000:.1f}M"
    if value >= 1000:
        return f"{sign}{symbol}{value / 1000:.0f}K"
    return f"{sign}{symbol}{value:g}"


def axis_ticks(values: Iterable[float], currency: str = "USD", count: int = 5) -> Tuple[List[float], List[str]]:
    """Evenly spaced y-axis ticks spanning zero and the data, with compact labels."""
    values = list(values)
    low = min(values + [0.0])
    high = max(values + [0.0])
    if high == low:
        return [0.0], [format_axis(0, currency)]

    step = (high - low) / (count - 1)
    ticks = [low + step * i for i in range(count)]
    return ticks, [format_axis(tick, currency) for tick in ticks]


class CurrencyConverter:
    """Converts between USD, INR and GBP at fixed rates."""

    def __init__(self, usd_to_inr: float = USD_TO_INR, inr_per_gbp: float = INR_PER_GBP):
        self.usd_to_inr_rate = usd_to_inr
        self.inr_per_gbp = inr_per_gbp

    def usd_to_inr(self, value: float) -> float:
        return value * self.usd_to_inr_rate

    def inr_to_usd(self, value: float) -> float:
        return value / self.usd_to_inr_rate

    def inr_to_gbp(self, value: float) -> float:
        return value / self.inr_per_gbp

    def display_scale(self, currency: str) -> float:
        """Multiplier applied to USD amounts for the given display currency."""
        return self.usd_to_inr_rate if currency == "INR" else 1.0

    def format_value(self, value: float, currency: str, is_usd_input: bool = True) -> str:
        """Format a USD (or INR) amount in the display currency."""
        base_usd = value if is_usd_input else self.inr_to_usd(value)
        if currency == "INR":
            return format_currency(self.usd_to_inr(base_usd), "INR")
        return format_currency(base_usd, "USD")

    def budget_gbp(self, budget_inr: float) -> int:
        return _round_whole(self.inr_to_gbp(budget_inr))

    def target_profit_inr(self, target_monthly_profit: float) -> int:
        return _round_whole(self.usd_to_inr(target_monthly_profit))
