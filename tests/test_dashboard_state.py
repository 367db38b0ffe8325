"""Tests for the dashboard reducer."""
import unittest

from hotelintel.dashboard.state import (
    ANALYSIS_FAILED_MESSAGE,
    AnalysisFailed,
    AnalysisStarted,
    AnalysisSucceeded,
    DashboardState,
    SelectMonth,
    SetBudget,
    SetDisplayCurrency,
    SetLocation,
    SetTargetProfit,
    SetTargetROI,
    reduce,
)
from hotelintel.gemini.schema import BusinessAnalysis

from sample_analysis import sample_analysis


class TestReducer(unittest.TestCase):

    def setUp(self):
        self.state = DashboardState()
        self.analysis = BusinessAnalysis.model_validate(sample_analysis())

    def test_defaults(self):
        self.assertEqual(self.state.budget_inr, 5_000_000)
        self.assertEqual(self.state.display_currency, "INR")
        self.assertEqual(self.state.selected_month, "2025-11")
        self.assertFalse(self.state.is_loading)
        self.assertIsNone(self.state.analysis)

    def test_parameter_updates_return_new_state(self):
        state = reduce(self.state, SetBudget(7_500_000))
        state = reduce(state, SetTargetProfit(20_000))
        state = reduce(state, SetTargetROI(25))
        state = reduce(state, SelectMonth("2025-06"))
        state = reduce(state, SetDisplayCurrency("USD"))

        self.assertEqual(state.budget_inr, 7_500_000)
        self.assertEqual(state.target_monthly_profit, 20_000)
        self.assertEqual(state.target_roi, 25)
        self.assertEqual(state.selected_month, "2025-06")
        self.assertEqual(state.display_currency, "USD")
        # Original untouched
        self.assertEqual(self.state.budget_inr, 5_000_000)

    def test_location_change_clears_analysis(self):
        state = reduce(self.state, AnalysisStarted(1))
        state = reduce(state, AnalysisSucceeded(1, self.analysis))
        self.assertIsNotNone(state.analysis)

        state = reduce(state, SetLocation("Mumbai"))
        self.assertEqual(state.location, "Mumbai")
        self.assertIsNone(state.analysis)

    def test_unsupported_currency(self):
        with self.assertRaises(ValueError):
            reduce(self.state, SetDisplayCurrency("GBP"))

    def test_unknown_action(self):
        with self.assertRaises(TypeError):
            reduce(self.state, object())


class TestAnalysisTransitions(unittest.TestCase):

    def setUp(self):
        self.state = DashboardState()
        self.analysis = BusinessAnalysis.model_validate(sample_analysis())

    def test_started_sets_loading_and_clears_error(self):
        state = reduce(self.state, AnalysisStarted(1))
        state = reduce(state, AnalysisFailed(1))
        self.assertEqual(state.error, ANALYSIS_FAILED_MESSAGE)

        state = reduce(state, AnalysisStarted(2))
        self.assertTrue(state.is_loading)
        self.assertIsNone(state.error)
        self.assertEqual(state.pending_request_id, 2)

    def test_success_stores_result(self):
        state = reduce(self.state, AnalysisStarted(1))
        state = reduce(state, AnalysisSucceeded(1, self.analysis))

        self.assertFalse(state.is_loading)
        self.assertIs(state.analysis, self.analysis)
        self.assertIsNone(state.pending_request_id)

    def test_failure_keeps_previous_analysis(self):
        state = reduce(self.state, AnalysisStarted(1))
        state = reduce(state, AnalysisSucceeded(1, self.analysis))
        state = reduce(state, AnalysisStarted(2))
        state = reduce(state, AnalysisFailed(2))

        self.assertFalse(state.is_loading)
        self.assertEqual(state.error, ANALYSIS_FAILED_MESSAGE)
        self.assertIs(state.analysis, self.analysis)

    def test_stale_response_ignored(self):
        """Only the most recently started request may change the state."""
        state = reduce(self.state, AnalysisStarted(1))
        state = reduce(state, AnalysisStarted(2))

        after_stale = reduce(state, AnalysisSucceeded(1, self.analysis))
        self.assertIs(after_stale, state)
        self.assertTrue(after_stale.is_loading)

        after_stale_failure = reduce(state, AnalysisFailed(1))
        self.assertIs(after_stale_failure, state)

        final = reduce(state, AnalysisSucceeded(2, self.analysis))
        self.assertFalse(final.is_loading)
        self.assertIs(final.analysis, self.analysis)

    def test_late_response_after_completion_ignored(self):
        state = reduce(self.state, AnalysisStarted(1))
        state = reduce(state, AnalysisFailed(1))
        state_after = reduce(state, AnalysisSucceeded(1, self.analysis))
        self.assertIsNone(state_after.analysis)


if __name__ == "__main__":
    unittest.main()
