"""
Courier Dispatch - Operations Dashboard
=======================================

Dashboard for pricing a batch of packages and previewing fleet dispatch.

Features:
- Editable package list in the same format as the CLI input
- Fleet parameters in the sidebar (zero vehicles = cost-only mode)
- KPI cards, package table and trip log
"""

import os
import sys
from typing import List, Optional

import pandas as pd
import streamlit as st

# Ensure courier is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from courier import report
from courier.models import DeliveryRequest, DispatchStatus
from courier.offers import OFFERS
from courier.reader import RequestError, parse_request
from courier.simulation import run_request
from courier.utils import format_time_duration

# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="Courier Dispatch",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded"
)

SAMPLE_PACKAGES = """PKG1 50 30 R1
PKG2 75 125 R3
PKG3 175 100 R3
PKG4 110 60 R2
PKG5 155 95 NA"""


# =============================================================================
# SIDEBAR
# =============================================================================

def render_sidebar() -> List[str]:
    """Render the sidebar controls and return the header and fleet lines."""
    st.sidebar.markdown("## 🎛️ Configuration")
    st.sidebar.markdown("---")

    st.sidebar.markdown("### 💰 Pricing")
    base_cost = st.sidebar.number_input("Base delivery cost", min_value=0, value=100, step=10)

    st.sidebar.markdown("---")
    st.sidebar.markdown("### 🚚 Fleet")
    vehicles = st.sidebar.slider(
        "Vehicles",
        min_value=0,
        max_value=10,
        value=2,
        help="Set to 0 to compute costs only"
    )
    speed = st.sidebar.number_input("Max speed (km/h)", min_value=1, value=70)
    capacity = st.sidebar.number_input("Max load (kg)", min_value=0, value=200)

    st.sidebar.markdown("---")
    st.sidebar.markdown("### 🏷️ Offers")
    st.sidebar.dataframe(
        pd.DataFrame([
            {
                "Code": o.code,
                "Discount": f"{o.discount_percent}%",
                "Distance": repr(o.distance_range),
                "Weight": repr(o.weight_range),
            }
            for o in OFFERS
        ]),
        hide_index=True,
    )

    return [f"{base_cost}", f"{vehicles} {speed} {capacity}"]


def build_request(header_and_fleet: List[str], package_text: str) -> Optional[DeliveryRequest]:
    """Assemble the input lines and parse them, reporting errors on the page."""
    base_cost, fleet_line = header_and_fleet
    package_lines = [line for line in package_text.splitlines() if line.strip()]
    lines = [f"{base_cost} {len(package_lines)}", *package_lines, fleet_line]
    try:
        return parse_request(lines)
    except RequestError as e:
        st.error(f"Invalid package list: {e}")
        return None


# =============================================================================
# RESULTS
# =============================================================================

def render_kpi_row(summary: dict) -> None:
    """Render the headline figures as metric cards."""
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Packages", summary["Packages"])
    col2.metric("Total Discount", f"{summary['Total Discount']:.2f}")
    col3.metric("Total Revenue", f"{summary['Total Revenue']:.2f}")
    if "Makespan" in summary:
        col4.metric("Fleet Back At", format_time_duration(summary["Makespan"]))
    else:
        col4.metric("Mode", "Cost only")


def main():
    """Main application entry point."""
    st.title("📦 Courier Dispatch")
    st.caption("Delivery cost and time estimation for a depot fleet")

    header_and_fleet = render_sidebar()

    package_text = st.text_area(
        "Packages (pkg_id weight_kg distance_km offer_code)",
        value=SAMPLE_PACKAGES,
        height=200,
    )

    if not st.button("🚀 Estimate", use_container_width=True):
        return

    request = build_request(header_and_fleet, package_text)
    if request is None:
        return

    with st.spinner("Dispatching..."):
        result = run_request(request)

    summary = report.summarize(request.packages, result)
    render_kpi_row(summary)

    if result is not None and result.status == DispatchStatus.STALLED:
        st.warning(
            "No vehicle can carry: "
            + ", ".join(p.package_id for p in result.undelivered)
        )

    st.markdown("### Packages")
    st.dataframe(report.packages_frame(request.packages), hide_index=True, use_container_width=True)

    if result is not None and result.shipments:
        st.markdown("### Trips")
        st.dataframe(report.shipments_frame(result.shipments), hide_index=True, use_container_width=True)


if __name__ == "__main__":
    main()
