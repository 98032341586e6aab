# courier-dispatch/courier/__init__.py

from .models import (
    Offer,
    Package,
    Vehicle,
    Shipment,
    DeliveryRequest,
    FleetSpec,
    PackageStatus,
    DispatchStatus,
)
from .offers import OFFERS, find_offer, calculate_cost, apply_costs
from .dispatch import select_shipment
from .simulation import DispatchSimulation, DispatchResult, run_request
from .reader import RequestError, parse_request, read_request, build_fleet
from .writer import format_results, write_results

__version__ = "1.0.0"

__all__ = [
    # Models
    "Offer",
    "Package",
    "Vehicle",
    "Shipment",
    "DeliveryRequest",
    "FleetSpec",
    "PackageStatus",
    "DispatchStatus",
    # Core
    "DispatchSimulation",
    "DispatchResult",
    "RequestError",
    # Functions
    "find_offer",
    "calculate_cost",
    "apply_costs",
    "select_shipment",
    "run_request",
    "parse_request",
    "read_request",
    "build_fleet",
    "format_results",
    "write_results",
    # Config
    "OFFERS",
]
