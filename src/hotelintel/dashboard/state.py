"""Immutable dashboard state and the single reducer that updates it."""
from dataclasses import dataclass, replace
from typing import Optional, Union

from hotelintel.gemini.schema import BusinessAnalysis

ANALYSIS_FAILED_MESSAGE = "Analysis failed. Please check your backend connection."

ANALYSIS_STAGES = (
    "Auditing Historical Performance...",
    "Querying Global Market Intelligence...",
    "Calibrating Local Benchmarks...",
    "Simulating ROI Projections...",
    "Synthesizing Executive Strategy...",
)

DISPLAY_CURRENCIES = ("USD", "INR")


@dataclass(frozen=True)
class DashboardState:
    """Parameters chosen by the user plus the analysis outcome."""
    location: str = "San Francisco"
    budget_inr: float = 5_000_000
    target_monthly_profit: float = 15_000
    target_roi: float = 20
    display_currency: str = "INR"
    selected_month: str = "2025-11"
    is_loading: bool = False
    error: Optional[str] = None
    analysis: Optional[BusinessAnalysis] = None
    pending_request_id: Optional[int] = None


@dataclass(frozen=True)
class SetBudget:
    budget_inr: float


@dataclass(frozen=True)
class SetTargetProfit:
    target_monthly_profit: float


@dataclass(frozen=True)
class SetTargetROI:
    target_roi: float


@dataclass(frozen=True)
class SetLocation:
    location: str


@dataclass(frozen=True)
class SetDisplayCurrency:
    currency: str


@dataclass(frozen=True)
class SelectMonth:
    month_key: str


@dataclass(frozen=True)
class AnalysisStarted:
    request_id: int


@dataclass(frozen=True)
class AnalysisSucceeded:
    request_id: int
    result: BusinessAnalysis


@dataclass(frozen=True)
class AnalysisFailed:
    request_id: int
    message: str = ANALYSIS_FAILED_MESSAGE


Action = Union[
    SetBudget, SetTargetProfit, SetTargetROI, SetLocation, SetDisplayCurrency,
    SelectMonth, AnalysisStarted, AnalysisSucceeded, AnalysisFailed
]


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Return the state that follows from applying action to state."""
    if isinstance(action, SetBudget):
        return replace(state, budget_inr=action.budget_inr)
    if isinstance(action, SetTargetProfit):
        return replace(state, target_monthly_profit=action.target_monthly_profit)
    if isinstance(action, SetTargetROI):
        return replace(state, target_roi=action.target_roi)
    if isinstance(action, SetLocation):
        # A new market invalidates the previous strategy
        return replace(state, location=action.location, analysis=None)
    if isinstance(action, SetDisplayCurrency):
        if action.currency not in DISPLAY_CURRENCIES:
            raise ValueError(f"Unsupported display currency: {action.currency}")
        return replace(state, display_currency=action.currency)
    if isinstance(action, SelectMonth):
        return replace(state, selected_month=action.month_key)
    if isinstance(action, AnalysisStarted):
        return replace(state, is_loading=True, error=None, pending_request_id=action.request_id)
    if isinstance(action, AnalysisSucceeded):
        if action.request_id != state.pending_request_id:
            return state
        return replace(state, analysis=action.result, is_loading=False, pending_request_id=None)
    if isinstance(action, AnalysisFailed):
        if action.request_id != state.pending_request_id:
            return state
        return replace(state, error=action.message, is_loading=False, pending_request_id=None)
    raise TypeError(f"Unknown dashboard action: {action!r}")
