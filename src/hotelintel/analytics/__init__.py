"""Transaction analytics module."""
from .models import Transaction, Aggregate, AggregatedPeriod, ServiceStat, ServicePerformance, SERVICE_TYPES
from .aggregator import Aggregator, mom_change, previous_month_key
from .currency import CurrencyConverter, format_currency, format_axis, axis_ticks, USD_TO_INR, INR_PER_GBP
from .sample_data import load_sample_transactions, load_transactions

__all__ = [
    "Transaction",
    "Aggregate",
    "AggregatedPeriod",
    "ServiceStat",
    "ServicePerformance",
    "SERVICE_TYPES",
    "Aggregator",
    "mom_change",
    "previous_month_key",
    "CurrencyConverter",
    "format_currency",
    "format_axis",
    "axis_ticks",
    "USD_TO_INR",
    "INR_PER_GBP",
    "load_sample_transactions",
    "load_transactions",
]
