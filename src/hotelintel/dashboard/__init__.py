"""Dashboard state, controller and Streamlit page."""
from .state import DashboardState, reduce, ANALYSIS_STAGES
from .controller import DashboardController, DashboardView

__all__ = ["DashboardState", "reduce", "ANALYSIS_STAGES", "DashboardController", "DashboardView"]
