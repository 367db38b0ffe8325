"""Main entry point: backend server, dashboard and console reports."""
import sys
import argparse
from pathlib import Path

from hotelintel.config import ConfigManager, apply_logging_settings, get_settings
from hotelintel.analytics.currency import format_currency
from hotelintel.dashboard.controller import DashboardController
from hotelintel.dashboard.state import SelectMonth, SetDisplayCurrency, SetLocation
from hotelintel.utils.logger import get_logger

logger = get_logger()


def serve_command() -> None:
    """Run the analysis backend with uvicorn."""
    import uvicorn

    settings = get_settings()
    manager = ConfigManager()
    config = manager.load_config()
    if config:
        is_valid, message = manager.validate_config(config)
    else:
        is_valid, message = False, "No configuration found; set GEMINI_API_KEY"
    if not is_valid:
        logger.critical(f"Invalid configuration: {message}")
        sys.exit(1)

    logger.info(f"Starting analysis backend on {settings.server_host}:{settings.server_port}")
    uvicorn.run("hotelintel.api.server:app", host=settings.server_host, port=settings.server_port)


def dashboard_command() -> None:
    """Launch the Streamlit dashboard."""
    from streamlit.web import cli as stcli

    app_path = Path(__file__).parent / "dashboard" / "app.py"
    sys.argv = ["streamlit", "run", str(app_path)]
    sys.exit(stcli.main())


def summary_command(controller: DashboardController, currency: str = None, month: str = None) -> None:
    """Print month cards and the timeline table."""
    if currency:
        controller.dispatch(SetDisplayCurrency(currency))
    if month:
        controller.dispatch(SelectMonth(month))

    state = controller.state
    view = controller.snapshot()
    fmt = controller.converter.format_value

    print(f"\nLocation: {state.location}   Month: {state.selected_month}   Currency: {state.display_currency}")
    for label, key in (("Revenue", "revenue"), ("Operating Cost", "cost"), ("Contribution", "profit")):
        mom = view.month_over_month[key]
        badge = f"{mom:+.1f}% MoM" if mom is not None else ""
        print(
            f"{label:<16} {fmt(view.month_totals.metric(key), state.display_currency):>14} {badge:<14} "
            f"period total {fmt(view.totals.metric(key), state.display_currency)}"
        )
    print(f"{'Budget':<16} {fmt(state.budget_inr, state.display_currency, is_usd_input=False):>14}")

    _print_timeline_table(view.timeline, state.display_currency)


def _print_timeline_table(timeline: list, currency: str) -> None:
    """Print formatted table of timeline rows."""
    print(f"\n{'Month':<8} {'Revenue':>14} {'Cost':>14} {'Profit':>14} {'Yield':>8}  {'Top':<10} {'Bottom':<10}")
    print("-" * 86)

    for row in timeline:
        yield_pct = f"{row.yield_pct:.1f}%" if row.yield_pct is not None else "-"
        print(
            f"{row.label:<8} {format_currency(row.revenue, currency):>14} "
            f"{format_currency(row.cost, currency):>14} {format_currency(row.profit, currency):>14} "
            f"{yield_pct:>8}  {row.top_service.name if row.top_service else '-':<10} "
            f"{row.bottom_service.name if row.bottom_service else '-':<10}"
        )


def analyze_command(controller: DashboardController, location: str = None) -> int:
    """Run one analysis against the backend and print the strategy."""
    if location:
        controller.dispatch(SetLocation(location))

    state = controller.run_analysis()
    if state.error:
        print(state.error)
        return 1

    analysis = state.analysis
    print(f"\n{analysis.historical_summary}")
    if analysis.simulation:
        sim = analysis.simulation
        print(f"\nJudgment: {sim.judgment}")
        print(f"ROI {sim.roi_percentage:g}% | break-even {sim.break_even_months:g} months | "
              f"stability {sim.recommendation_stability}")
        print(f"\n{'Sub-Category':<30} {'Service':<10} {'Allocation':>16}  Yield")
        print("-" * 72)
        for item in sim.investment_plan:
            print(f"{item.sub_category:<30} {item.service_type:<10} "
                  f"{format_currency(item.allocation_amount, 'INR'):>16}  {item.expected_annual_yield}")
    for source in analysis.sources:
        print(f"  source: {source.title} <{source.uri}>")
    return 0


def main():
    """Main entry point for HotelIntel."""
    parser = argparse.ArgumentParser(description="HotelIntel Service Performance Dashboard")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["serve", "dashboard", "summary", "analyze"],
        default="summary",
        help="Command to execute (default: summary)"
    )
    parser.add_argument("--currency", choices=["USD", "INR"], help="Display currency (summary)")
    parser.add_argument("--month", help="Selected month as YYYY-MM (summary)")
    parser.add_argument("--location", help="Market location (analyze)")

    args = parser.parse_args()

    settings = get_settings()
    config = ConfigManager().load_config()
    apply_logging_settings(settings, config)

    if args.command == "serve":
        serve_command()
        return

    if args.command == "dashboard":
        dashboard_command()
        return

    controller = DashboardController.from_settings(settings, config)

    if args.command == "summary":
        summary_command(controller, args.currency, args.month)
        return

    sys.exit(analyze_command(controller, args.location))


if __name__ == "__main__":
    main()
