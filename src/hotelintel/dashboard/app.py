"""Streamlit page: executive dashboard for ancillary hotel services."""
from datetime import date

import pandas as pd
import plotly.express as px
import streamlit as st

from hotelintel.config import ConfigManager, apply_logging_settings, get_settings
from hotelintel.analytics.currency import axis_ticks, format_currency
from hotelintel.dashboard.controller import DashboardController, DashboardView
from hotelintel.dashboard.state import (
    ANALYSIS_STAGES,
    SelectMonth,
    SetBudget,
    SetDisplayCurrency,
    SetLocation,
    SetTargetProfit,
    SetTargetROI,
)

METRIC_CARDS = (
    ("Revenue", "revenue"),
    ("Operating Cost", "cost"),
    ("Contribution", "profit"),
)


def month_name(month_key: str) -> str:
    return date(int(month_key[:4]), int(month_key[5:7]), 1).strftime("%B %Y")


def get_controller() -> DashboardController:
    """One controller per browser session."""
    if "controller" not in st.session_state:
        settings = get_settings()
        config = ConfigManager().load_config()
        apply_logging_settings(settings, config)
        st.session_state.controller = DashboardController.from_settings(settings, config)
    return st.session_state.controller


def sidebar(controller: DashboardController, view: DashboardView):
    state = controller.state
    st.sidebar.header("Global Parameters")

    months = view.available_months or [state.selected_month]
    index = months.index(state.selected_month) if state.selected_month in months else len(months) - 1
    month = st.sidebar.selectbox("Active Analysis Window", months, index=index, format_func=month_name)
    budget = st.sidebar.number_input("Allocated Capital (INR)", value=float(state.budget_inr), step=100000.0)
    target = st.sidebar.number_input("Target Profit Threshold (USD)", value=float(state.target_monthly_profit), step=1000.0)
    roi = st.sidebar.number_input("Target ROI (%)", value=float(state.target_roi), step=1.0)
    currency = st.sidebar.radio(
        "Display Currency", ("USD", "INR"),
        index=("USD", "INR").index(state.display_currency), horizontal=True
    )

    location = st.sidebar.text_input("Market Location", value=state.location)
    if st.sidebar.button("Load Location Data") and location != state.location:
        controller.dispatch(SetLocation(location))

    if month != state.selected_month:
        controller.dispatch(SelectMonth(month))
    if budget != state.budget_inr:
        controller.dispatch(SetBudget(budget))
    if target != state.target_monthly_profit:
        controller.dispatch(SetTargetProfit(target))
    if roi != state.target_roi:
        controller.dispatch(SetTargetROI(roi))
    if currency != state.display_currency:
        controller.dispatch(SetDisplayCurrency(currency))

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Active Node: {controller.state.location}")


def metric_row(controller: DashboardController, view: DashboardView):
    state = controller.state
    fmt = controller.converter.format_value
    columns = st.columns(4)

    for column, (label, key) in zip(columns, METRIC_CARDS):
        mom = view.month_over_month[key]
        with column:
            st.metric(
                f"{label} · {month_name(state.selected_month)}",
                fmt(view.month_totals.metric(key), state.display_currency),
                delta=f"{mom:.1f}% MoM" if mom is not None else None
            )
            st.caption(f"Aggregate Period Total: {fmt(view.totals.metric(key), state.display_currency)}")

    with columns[3]:
        st.metric("Total Portfolio Budget", fmt(state.budget_inr, state.display_currency, is_usd_input=False))
        st.caption(f"≈ £{view.budget_gbp:,} · Investment Capital")


def charts(controller: DashboardController, view: DashboardView):
    currency = controller.state.display_currency
    timeline = pd.DataFrame([
        {"Month": p.label, "Revenue": p.revenue, "Cost": p.cost, "Profit": p.profit}
        for p in view.timeline
    ])
    services = pd.DataFrame([
        {"Service": s.name, "Revenue": s.revenue, "Net Contribution": s.profit}
        for s in view.service_stats
    ])

    left, right = st.columns(2)
    with left:
        fig = px.area(timeline, x="Month", y=["Revenue", "Profit"], title="Fiscal Trajectory")
        # area traces stack, profit on top of revenue
        stacked = list(timeline["Revenue"]) + list(timeline["Revenue"] + timeline["Profit"])
        tickvals, ticktext = axis_ticks(stacked, currency)
        fig.update_layout(yaxis={"title": currency, "tickvals": tickvals, "ticktext": ticktext})
        st.plotly_chart(fig, use_container_width=True)
    with right:
        if services.empty:
            st.info("No service data available.")
        else:
            fig = px.pie(services, names="Service", values="Net Contribution", title="Contribution Mix")
            st.plotly_chart(fig, use_container_width=True)

    if not services.empty:
        fig = px.bar(services, x="Service", y="Revenue", title="Revenue by Service", text_auto=".2s")
        tickvals, ticktext = axis_ticks(services["Revenue"], currency)
        fig.update_layout(yaxis={"tickvals": tickvals, "ticktext": ticktext})
        st.plotly_chart(fig, use_container_width=True)

    st.markdown("### Monthly Performance Ledger")
    rows = []
    for p in view.timeline:
        rows.append({
            "Fiscal Segment": p.label,
            "Gross Revenue": format_currency(p.revenue, currency),
            "Overhead Cost": format_currency(p.cost, currency),
            "Net Contribution": format_currency(p.profit, currency),
            "Yield Velocity": f"{p.yield_pct:.1f}%" if p.yield_pct is not None else "-",
            "Top Service": p.top_service.name if p.top_service else "-",
            "Bottom Service": p.bottom_service.name if p.bottom_service else "-",
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def analysis_sections(controller: DashboardController, view: DashboardView):
    state = controller.state
    analysis = state.analysis
    fmt = controller.converter.format_value

    if analysis is None:
        st.info("Run the optimization to generate a market strategy for this location.")
        return

    simulation = analysis.simulation
    st.markdown("## Market Intelligence Synthesis: Executive Assessment")
    st.write(analysis.historical_summary)

    if simulation:
        st.markdown(f"> {simulation.judgment}")
        cols = st.columns(4)
        cols[0].metric("ROI", f"{simulation.roi_percentage:g}%")
        cols[1].metric("Break-even", f"{simulation.break_even_months:g} months")
        cols[2].metric("Confidence", f"{simulation.confidence_score:g}")
        cols[3].metric("Stability", simulation.recommendation_stability)

        for judgment in simulation.category_judgments:
            st.markdown(f"**{judgment.category}: {judgment.verdict}** ({judgment.priority_score:g})")
            st.caption(judgment.rationale)

        st.markdown("## Strategic Investment Distribution")
        st.caption(f"Targeting ₹{view.target_profit_inr:,} Monthly Net Gain")
        plan = pd.DataFrame([
            {
                "Allocated Sub-Category": item.sub_category,
                "Parent Service": item.service_type,
                "Allocation": fmt(item.allocation_amount, state.display_currency, is_usd_input=False),
                "Rationale": item.rationale,
                "Expected Yield": item.expected_annual_yield,
            }
            for item in simulation.investment_plan
        ])
        st.dataframe(plan, use_container_width=True, hide_index=True)

        if simulation.break_even_data:
            curve = pd.DataFrame([p.model_dump() for p in simulation.break_even_data])
            st.plotly_chart(
                px.line(curve, x="month", y="cumulative_profit", markers=True, title="Break-even Curve"),
                use_container_width=True
            )

    if analysis.usage_vs_demand:
        usage = pd.DataFrame([u.model_dump() for u in analysis.usage_vs_demand])
        st.plotly_chart(
            px.bar(usage, x="service", y=["actual_usage", "market_demand"], barmode="group",
                   title="Usage vs Market Demand"),
            use_container_width=True
        )

    st.markdown(f"## Localized Market Intelligence Grounding: {state.location}")
    for trend in analysis.market_trends:
        st.markdown(f"**{trend.title}** · _{trend.impact} momentum_")
        st.caption(trend.description)

    if analysis.what_if_actions:
        st.markdown("### What-if Actions")
        for action in analysis.what_if_actions:
            st.markdown(f"- **{action.action}** → {action.expected_outcome} (feasibility {action.feasibility_score:g})")

    if analysis.sources:
        st.markdown("### Market Intelligence Verification")
        for source in analysis.sources:
            st.markdown(f"- [{source.title}]({source.uri})")


def main():
    st.set_page_config(page_title="HotelIntel Executive Dashboard", page_icon="🏨", layout="wide")
    controller = get_controller()

    sidebar(controller, controller.snapshot())
    view = controller.snapshot()

    st.title("Market Intelligence & Strategy")
    st.caption("Executive Service Performance Matrix")

    if st.button("Run Optimization", disabled=controller.state.is_loading):
        with st.spinner(" · ".join(ANALYSIS_STAGES)):
            controller.run_analysis()

    if controller.state.error:
        st.error(controller.state.error)

    metric_row(controller, view)
    charts(controller, view)
    analysis_sections(controller, view)


if __name__ == "__main__":
    main()
