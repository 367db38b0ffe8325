"""Tests for analysis schema validation."""
import unittest

from pydantic import ValidationError

from hotelintel.gemini.schema import AnalysisRequest, BusinessAnalysis

from sample_analysis import sample_analysis


class TestBusinessAnalysis(unittest.TestCase):

    def test_optional_sections_may_be_absent(self):
        body = sample_analysis()
        for key in ("simulation", "whatIfActions", "usageVsDemand"):
            del body[key]

        analysis = BusinessAnalysis.model_validate(body)

        self.assertIsNone(analysis.simulation)
        self.assertIsNone(analysis.what_if_actions)
        self.assertIsNone(analysis.usage_vs_demand)

    def test_invalid_stability_rejected(self):
        body = sample_analysis()
        body["simulation"]["recommendationStability"] = "Stable"
        with self.assertRaises(ValidationError):
            BusinessAnalysis.model_validate(body)

    def test_non_numeric_allocation_rejected(self):
        body = sample_analysis()
        body["simulation"]["investmentPlan"][0]["allocationAmount"] = "a lot"
        with self.assertRaises(ValidationError):
            BusinessAnalysis.model_validate(body)

    def test_dump_uses_wire_keys(self):
        dumped = BusinessAnalysis.model_validate(sample_analysis()).model_dump(by_alias=True, exclude_none=True)

        self.assertIn("historicalSummary", dumped)
        self.assertIn("estimatedROI", dumped["recommendations"][0])
        self.assertIn("breakEvenMonths", dumped["simulation"])
        self.assertEqual(dumped["sources"][0]["uri"], "https://example.com/sf-outlook")


class TestAnalysisRequest(unittest.TestCase):

    def test_parses_wire_body(self):
        request = AnalysisRequest.model_validate({
            "transactions": [{
                "id": "mar-1", "date": "2025-03-05", "serviceType": "MICE",
                "revenue": 45000, "cost": 20000, "location": "San Francisco"
            }],
            "location": "San Francisco",
            "budgetINR": 5000000,
            "targetMonthlyProfit": 15000,
            "targetROI": 20,
        })

        self.assertEqual(request.budget_inr, 5000000)
        self.assertEqual(request.transactions[0].service_type, "MICE")

    def test_missing_budget_rejected(self):
        with self.assertRaises(ValidationError):
            AnalysisRequest.model_validate({
                "transactions": [], "location": "X", "targetMonthlyProfit": 1, "targetROI": 1
            })


if __name__ == "__main__":
    unittest.main()
