"""Dashboard controller: owns the state and derives what the page shows."""
import itertools
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from hotelintel.analytics.aggregator import Aggregator
from hotelintel.analytics.currency import CurrencyConverter
from hotelintel.analytics.models import Aggregate, AggregatedPeriod, ServiceStat, Transaction
from hotelintel.analytics.sample_data import load_sample_transactions
from hotelintel.dashboard.state import (
    Action,
    AnalysisFailed,
    AnalysisStarted,
    AnalysisSucceeded,
    DashboardState,
    reduce,
)
from hotelintel.gemini.client import AnalysisClient
from hotelintel.utils.logger import get_logger
from hotelintel.utils.exceptions import AnalysisRequestFailed

logger = get_logger()

METRICS = ("revenue", "cost", "profit")


@dataclass(frozen=True)
class DashboardView:
    """Everything the page renders, in USD unless noted."""
    totals: Aggregate
    month_totals: Aggregate
    month_over_month: Dict[str, Optional[float]]
    service_stats: List[ServiceStat]  # display currency
    timeline: List[AggregatedPeriod]  # display currency
    available_months: List[str]
    budget_gbp: int
    target_profit_inr: int


class DashboardController:
    """Applies user actions through the reducer and runs the analysis."""

    def __init__(
        self,
        client: AnalysisClient,
        transactions: Sequence[Transaction] = None,
        state: DashboardState = None,
        aggregator: Aggregator = None,
        converter: CurrencyConverter = None
    ):
        self.client = client
        self.transactions = tuple(transactions) if transactions is not None else load_sample_transactions()
        self.state = state or DashboardState()
        self.aggregator = aggregator or Aggregator()
        self.converter = converter or CurrencyConverter()
        self._request_ids = itertools.count(1)

    @classmethod
    def from_settings(cls, settings, config=None) -> "DashboardController":
        """Build a controller wired to the configured backend and defaults."""
        endpoint = (config.analysis_endpoint if config and config.analysis_endpoint
                    else settings.analysis_endpoint)
        state = DashboardState(
            location=settings.default_location,
            budget_inr=settings.default_budget_inr,
            target_monthly_profit=settings.default_target_monthly_profit,
            target_roi=settings.default_target_roi,
            display_currency=settings.default_display_currency,
            selected_month=settings.default_selected_month
        )
        return cls(
            client=AnalysisClient(endpoint, timeout=settings.analysis_timeout_seconds),
            state=state,
            aggregator=Aggregator(
                timeline_start=(settings.timeline_start_year, settings.timeline_start_month),
                timeline_months=settings.timeline_months
            ),
            converter=CurrencyConverter(settings.usd_to_inr, settings.inr_per_gbp)
        )

    def dispatch(self, action: Action) -> DashboardState:
        self.state = reduce(self.state, action)
        return self.state

    def snapshot(self) -> DashboardView:
        """Derive aggregates for the current state."""
        state = self.state
        txns = self.transactions
        scale = self.converter.display_scale(state.display_currency)

        return DashboardView(
            totals=self.aggregator.totals(txns),
            month_totals=self.aggregator.month_totals(txns, state.selected_month),
            month_over_month={
                metric: self.aggregator.month_over_month(txns, state.selected_month, metric)
                for metric in METRICS
            },
            service_stats=self.aggregator.service_stats(txns, scale),
            timeline=self.aggregator.timeline(txns, scale),
            available_months=self.aggregator.available_months(txns),
            budget_gbp=self.converter.budget_gbp(state.budget_inr),
            target_profit_inr=self.converter.target_profit_inr(state.target_monthly_profit)
        )

    def run_analysis(self) -> DashboardState:
        """
        Run one analysis round-trip and apply its outcome.

        Each call gets a fresh request id; an outcome whose id is no longer
        pending is dropped by the reducer.
        """
        request_id = next(self._request_ids)
        started = self.dispatch(AnalysisStarted(request_id))

        try:
            result = self.client.analyze(
                self.transactions,
                started.location,
                started.budget_inr,
                started.target_monthly_profit,
                started.target_roi
            )
        except AnalysisRequestFailed as e:
            logger.warning(f"Analysis request #{request_id} failed: {e}")
            return self.dispatch(AnalysisFailed(request_id))
        except Exception:
            logger.exception(f"Analysis request #{request_id} failed unexpectedly")
            return self.dispatch(AnalysisFailed(request_id))

        logger.info(f"Analysis request #{request_id} completed")
        return self.dispatch(AnalysisSucceeded(request_id, result))
