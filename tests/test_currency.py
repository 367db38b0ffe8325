"""Tests for currency conversion and formatting."""
import unittest

from hotelintel.analytics.currency import CurrencyConverter, axis_ticks, format_currency, format_axis


class TestCurrencyConverter(unittest.TestCase):

    def setUp(self):
        self.converter = CurrencyConverter()

    def test_usd_inr_round_trip(self):
        for value in (0.0, 1.0, 15000.0, 123456.789, 0.01):
            self.assertAlmostEqual(self.converter.inr_to_usd(self.converter.usd_to_inr(value)), value)

    def test_fixed_rates(self):
        self.assertEqual(self.converter.usd_to_inr(100), 8350)
        self.assertAlmostEqual(self.converter.inr_to_gbp(108), 1)

    def test_display_scale(self):
        self.assertEqual(self.converter.display_scale("INR"), 83.5)
        self.assertEqual(self.converter.display_scale("USD"), 1.0)

    def test_planning_values(self):
        """Budget in GBP and target profit in INR, rounded to whole units."""
        self.assertEqual(self.converter.budget_gbp(5_000_000), 46296)
        self.assertEqual(self.converter.target_profit_inr(15000), 1252500)

    def test_format_value_usd_input(self):
        self.assertEqual(self.converter.format_value(1000, "USD"), "$1,000")
        self.assertEqual(self.converter.format_value(1000, "INR"), "₹83,500")

    def test_format_value_inr_input(self):
        self.assertEqual(self.converter.format_value(5_000_000, "INR", is_usd_input=False), "₹50,00,000")
        self.assertEqual(self.converter.format_value(835, "USD", is_usd_input=False), "$10")


class TestFormatting(unittest.TestCase):

    def test_indian_grouping(self):
        self.assertEqual(format_currency(1234567, "INR"), "₹12,34,567")
        self.assertEqual(format_currency(999, "INR"), "₹999")
        self.assertEqual(format_currency(100000, "INR"), "₹1,00,000")

    def test_western_grouping(self):
        self.assertEqual(format_currency(1234567, "USD"), "$1,234,567")

    def test_rounds_to_whole_units(self):
        self.assertEqual(format_currency(1234.5, "USD"), "$1,235")
        self.assertEqual(format_currency(1234.4, "USD"), "$1,234")

    def test_negative(self):
        self.assertEqual(format_currency(-2500, "USD"), "-$2,500")

    def test_unknown_currency(self):
        with self.assertRaises(ValueError):
            format_currency(1, "EUR")

    def test_axis_labels(self):
        self.assertEqual(format_axis(1_250_000, "INR"), "₹1.2M")
        self.assertEqual(format_axis(45_000, "USD"), "$45K")
        self.assertEqual(format_axis(900, "USD"), "$900")
        self.assertEqual(format_axis(-20_000, "USD"), "-$20K")

    def test_axis_ticks_span_zero_to_max(self):
        ticks, labels = axis_ticks([120_000, 1_000_000, 430_000], "USD")

        self.assertEqual(ticks, [0, 250_000, 500_000, 750_000, 1_000_000])
        self.assertEqual(labels, ["$0", "$250K", "$500K", "$750K", "$1.0M"])

    def test_axis_ticks_include_losses(self):
        _, labels = axis_ticks([-20_000, 60_000], "INR")
        self.assertEqual(labels, ["-₹20K", "₹0", "₹20K", "₹40K", "₹60K"])

    def test_axis_ticks_without_data(self):
        self.assertEqual(axis_ticks([], "USD"), ([0.0], ["$0"]))


if __name__ == "__main__":
    unittest.main()
