# courier-dispatch/courier/report.py
"""
Tabular reports for the Courier Dispatch service.

Builds pandas DataFrames of priced packages and of the dispatch trip log,
plus a small dictionary of headline figures. Used by the dashboard and by
the CLI's ``--table`` view.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from .models import Package, PackageStatus, Shipment
from .simulation import DispatchResult
from .utils import round_half_up

PACKAGE_COLUMNS: List[str] = [
    "Package", "Weight", "Distance", "Offer", "Discount",
    "Total Cost", "Vehicle", "Delivery Time", "Status",
]

SHIPMENT_COLUMNS: List[str] = [
    "Trip", "Vehicle", "Departure", "Packages", "Load", "Farthest", "Returns At",
]


def packages_frame(packages: List[Package]) -> pd.DataFrame:
    """One row per package, in input order."""
    rows = [
        {
            "Package": p.package_id,
            "Weight": p.weight,
            "Distance": p.distance,
            "Offer": p.offer_code or "",
            "Discount": p.discount,
            "Total Cost": p.total_cost,
            "Vehicle": p.vehicle_id,
            "Delivery Time": p.delivery_time,
            "Status": p.status.value,
        }
        for p in packages
    ]
    return pd.DataFrame(rows, columns=PACKAGE_COLUMNS)


def shipments_frame(shipments: List[Shipment]) -> pd.DataFrame:
    """One row per dispatched shipment, in dispatch order."""
    rows = [
        {
            "Trip": trip,
            "Vehicle": s.vehicle_id,
            "Departure": round_half_up(s.departure, 2),
            "Packages": ", ".join(s.package_ids),
            "Load": s.total_weight,
            "Farthest": s.max_distance,
            "Returns At": round_half_up(s.returns_at, 2),
        }
        for trip, s in enumerate(shipments, start=1)
    ]
    return pd.DataFrame(rows, columns=SHIPMENT_COLUMNS)


def summarize(packages: List[Package], result: Optional[DispatchResult] = None) -> Dict[str, Any]:
    """
    Headline figures for a run.

    Args:
        packages: Priced packages
        result: Dispatch outcome, None for cost-only runs

    Returns:
        Dictionary of display-ready KPI values
    """
    frame = packages_frame(packages)
    summary: Dict[str, Any] = {
        "Packages": len(frame),
        "Total Discount": round_half_up(frame["Discount"].sum(), 2) if len(frame) else 0.0,
        "Total Revenue": round_half_up(frame["Total Cost"].sum(), 2) if len(frame) else 0.0,
    }
    if result is not None:
        delivered = frame[frame["Status"] == PackageStatus.DELIVERED.value]
        summary.update({
            "Delivered": len(delivered),
            "Undeliverable": len(result.undelivered),
            "Shipments": len(result.shipments),
            "Last Delivery": delivered["Delivery Time"].max() if len(delivered) else None,
            "Makespan": round_half_up(result.makespan, 2),
            "Status": result.status.value,
        })
    return summary
