# courier-dispatch/courier/models.py
"""
Core domain models for the Courier Dispatch service.

This module defines the fundamental data structures used by the engines:
- Offer: A discount rule admitted by a weight range and a distance range
- Package: A parcel to price and deliver
- Vehicle: A capacity-constrained courier vehicle with its own clock
- Shipment: One vehicle load dispatched in a single round
- DeliveryRequest: Validated input handed over by the request reader
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from . import config


class PackageStatus(Enum):
    """Lifecycle states for a package during dispatch."""
    PENDING = "PENDING"              # Waiting for a vehicle
    DELIVERED = "DELIVERED"          # Assigned a delivery time
    UNDELIVERABLE = "UNDELIVERABLE"  # Left behind by a stalled dispatch


class DispatchStatus(Enum):
    """
    Terminal states of a dispatch simulation.

    - COMPLETED: Every package was delivered.
    - STALLED: No vehicle could take any remaining package.
    - SKIPPED: No fleet was configured, only costs were computed.
    """
    COMPLETED = "COMPLETED"
    STALLED = "STALLED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class Range:
    """
    A numeric interval with an inclusive lower bound.

    Attributes:
        lo: Lower bound (always inclusive)
        hi: Upper bound
        include_hi: Whether ``hi`` itself belongs to the range
    """
    lo: float
    hi: float
    include_hi: bool = True

    def __contains__(self, value: float) -> bool:
        if value < self.lo:
            return False
        return value <= self.hi if self.include_hi else value < self.hi

    def __repr__(self) -> str:
        closing = "]" if self.include_hi else ")"
        return f"[{self.lo}, {self.hi}{closing}"


@dataclass(frozen=True)
class Offer:
    """
    A percentage discount restricted to a weight range and a distance range.

    Both ranges must admit the package for the offer to apply; a matching
    code alone is not enough.
    """
    code: str
    discount_percent: int
    distance_range: Range
    weight_range: Range

    def is_applicable(self, weight: float, distance: float) -> bool:
        """Returns True when both the weight and the distance are in range."""
        return weight in self.weight_range and distance in self.distance_range


@dataclass(eq=False)
class Package:
    """
    Represents a parcel to be priced and, optionally, delivered.

    Attributes:
        package_id: Unique identifier within a run
        weight: Package weight in kg
        distance: Distance from the depot in km
        offer_code: Offer code supplied by the customer, if any

    Computed State:
        discount: Discount granted by the offer (2 decimals)
        total_cost: Delivery cost after discount
        delivery_time: Estimated delivery time in hours, None until delivered
        vehicle_id: Vehicle that carried the package
        status: Dispatch lifecycle state
    """
    package_id: str
    weight: int
    distance: int
    offer_code: Optional[str] = None

    discount: float = 0
    total_cost: float = 0
    delivery_time: Optional[float] = None
    vehicle_id: Optional[int] = None
    status: PackageStatus = PackageStatus.PENDING

    def base_cost(self, base_delivery_cost: int) -> int:
        """Delivery cost before any discount is applied."""
        return (
            base_delivery_cost
            + self.weight * config.WEIGHT_RATE
            + self.distance * config.DISTANCE_RATE
        )

    def __repr__(self) -> str:
        return f"Package({self.package_id}, {self.weight}kg, {self.distance}km, {self.status.value})"


@dataclass(eq=False)
class Vehicle:
    """
    Represents a courier vehicle in the fleet.

    Attributes:
        vehicle_id: 1-based position in the fleet
        max_weight: Load capacity in kg
        speed: Travel speed in km/h

    Dynamic State:
        available_at: Simulated hour at which the vehicle is back at the depot
        trips: Number of shipments carried so far
    """
    vehicle_id: int
    max_weight: int
    speed: int
    available_at: float = 0.0
    trips: int = 0

    def travel_time(self, distance: float) -> float:
        """One-way travel time in hours for the given distance."""
        return distance / self.speed

    def __repr__(self) -> str:
        return f"Vehicle({self.vehicle_id}, cap={self.max_weight}, at={self.available_at:.2f})"


@dataclass
class Shipment:
    """
    One vehicle load dispatched from the depot.

    The shipment only references packages; the simulation owns them.

    Attributes:
        vehicle_id: Vehicle carrying the load
        departure: Simulated hour the vehicle leaves the depot
        packages: Packages in the load, in pool order
        returns_at: Simulated hour the vehicle is back at the depot
    """
    vehicle_id: int
    departure: float
    packages: List[Package]
    returns_at: float = 0.0

    @property
    def total_weight(self) -> int:
        """Combined weight of the load."""
        return sum(p.weight for p in self.packages)

    @property
    def max_distance(self) -> int:
        """Distance to the farthest package in the load."""
        return max((p.distance for p in self.packages), default=0)

    @property
    def package_ids(self) -> List[str]:
        """Returns list of package IDs in this shipment."""
        return [p.package_id for p in self.packages]

    def __repr__(self) -> str:
        return f"Shipment(vehicle={self.vehicle_id}, packages={self.package_ids}, at={self.departure:.2f})"


@dataclass
class FleetSpec:
    """Uniform fleet description read from the input's fleet line."""
    vehicle_count: int
    max_speed: int
    max_weight: int


@dataclass
class DeliveryRequest:
    """
    Validated input for one run.

    Attributes:
        base_delivery_cost: Flat cost added to every package
        packages: Packages in input order
        fleet: Fleet description, or None for cost-only mode
    """
    base_delivery_cost: int
    packages: List[Package] = field(default_factory=list)
    fleet: Optional[FleetSpec] = None

    @property
    def has_fleet(self) -> bool:
        """True when at least one vehicle is configured."""
        return self.fleet is not None and self.fleet.vehicle_count > 0
