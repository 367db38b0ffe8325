"""Transaction aggregation by month and service type."""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Aggregate, AggregatedPeriod, ServicePerformance, ServiceStat, Transaction
from hotelintel.utils.logger import get_logger

logger = get_logger()

TIMELINE_START = (2025, 3)
TIMELINE_MONTHS = 9


def previous_month_key(month_key: str) -> str:
    """Calendar month before a YYYY-MM key."""
    year, month = int(month_key[:4]), int(month_key[5:7])
    if month == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month - 1:02d}"


def month_label(month_key: str) -> str:
    """Short label such as "Mar 25"."""
    return date(int(month_key[:4]), int(month_key[5:7]), 1).strftime("%b %y")


def mom_change(current: float, previous: float) -> Optional[float]:
    """Month-over-month change in percent, None when there is nothing to compare against."""
    if previous == 0:
        return None
    return (current - previous) / previous * 100


def _sum(transactions: Iterable[Transaction], scale: float) -> Aggregate:
    revenue = 0.0
    cost = 0.0
    for txn in transactions:
        revenue += txn.revenue
        cost += txn.cost
    return Aggregate(revenue=revenue * scale, cost=cost * scale)


class Aggregator:
    """Aggregates transactions by month and service type."""

    def __init__(self, timeline_start: Tuple[int, int] = TIMELINE_START, timeline_months: int = TIMELINE_MONTHS):
        self.timeline_start = timeline_start
        self.timeline_months = timeline_months

    def totals(self, transactions: List[Transaction], scale: float = 1.0) -> Aggregate:
        """Totals over every transaction."""
        return _sum(transactions, scale)

    def month_totals(self, transactions: List[Transaction], month_key: str, scale: float = 1.0) -> Aggregate:
        """Totals over transactions whose date starts with month_key."""
        return _sum((txn for txn in transactions if txn.date.startswith(month_key)), scale)

    def group_by_month(self, transactions: List[Transaction], scale: float = 1.0) -> Dict[str, Aggregate]:
        """Partition by YYYY-MM prefix of the transaction date."""
        return self._group(transactions, lambda txn: txn.month_key, scale)

    def group_by_service(self, transactions: List[Transaction], scale: float = 1.0) -> Dict[str, Aggregate]:
        """Partition by service type, in first-encountered order."""
        return self._group(transactions, lambda txn: txn.service_type, scale)

    def service_stats(self, transactions: List[Transaction], scale: float = 1.0) -> List[ServiceStat]:
        return [
            ServiceStat(name=name, revenue=agg.revenue, cost=agg.cost)
            for name, agg in self.group_by_service(transactions, scale).items()
        ]

    def available_months(self, transactions: List[Transaction]) -> List[str]:
        return sorted({txn.month_key for txn in transactions})

    def month_over_month(self, transactions: List[Transaction], month_key: str, metric: str) -> Optional[float]:
        """
        Change of a metric (revenue, cost or profit) against the previous calendar month.

        Returns:
            Percentage change, or None when the previous month's value is zero
        """
        current = self.month_totals(transactions, month_key).metric(metric)
        previous = self.month_totals(transactions, previous_month_key(month_key)).metric(metric)
        return mom_change(current, previous)

    def timeline_months_keys(self) -> List[str]:
        """The fixed calendar window, independent of the data."""
        year, month = self.timeline_start
        keys = []
        for offset in range(self.timeline_months):
            total = (month - 1) + offset
            keys.append(f"{year + total // 12:04d}-{total % 12 + 1:02d}")
        return keys

    def timeline(self, transactions: List[Transaction], scale: float = 1.0) -> List[AggregatedPeriod]:
        """
        Build the fixed timeline with per-month top and bottom services.

        Args:
            transactions: Transactions to aggregate
            scale: Currency multiplier applied to every amount

        Returns:
            One AggregatedPeriod per month of the window; empty months are zero
        """
        by_month = defaultdict(list)
        for txn in transactions:
            by_month[txn.month_key].append(txn)

        periods = []
        for key in self.timeline_months_keys():
            month_txns = by_month.get(key, [])
            agg = _sum(month_txns, scale)
            top, bottom = self._extreme_services(month_txns, scale)
            periods.append(AggregatedPeriod(
                month_key=key,
                label=month_label(key),
                revenue=agg.revenue,
                cost=agg.cost,
                top_service=top,
                bottom_service=bottom
            ))

        logger.debug(
            f"Timeline built for {len(periods)} months from {len(transactions)} transactions"
        )
        return periods

    def _group(self, transactions, key_func, scale: float) -> Dict[str, Aggregate]:
        revenue = defaultdict(float)
        cost = defaultdict(float)
        for txn in transactions:
            key = key_func(txn)
            revenue[key] += txn.revenue
            cost[key] += txn.cost
        return {key: Aggregate(revenue=revenue[key] * scale, cost=cost[key] * scale) for key in revenue}

    @staticmethod
    def _extreme_services(transactions: List[Transaction], scale: float):
        performance = defaultdict(float)
        for txn in transactions:
            performance[txn.service_type] += (txn.revenue - txn.cost) * scale

        entries = list(performance.items())
        if not entries:
            return None, None

        # Pairwise reduction: on equal values the later entry replaces the earlier one
        top = entries[0]
        bottom = entries[0]
        for entry in entries[1:]:
            top = top if top[1] > entry[1] else entry
            bottom = bottom if bottom[1] < entry[1] else entry

        return ServicePerformance(*top), ServicePerformance(*bottom)
