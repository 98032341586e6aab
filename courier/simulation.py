# courier-dispatch/courier/simulation.py
"""
Dispatch simulation for the Courier Dispatch service.

This module estimates delivery times by simulating a fleet of vehicles
shuttling loads out of a single depot. Simulated time is in hours and
advances event by event rather than in fixed ticks:

1. Take the vehicle that is back at the depot first
2. Ask the shipment selector for the best load it can carry
3. Stamp each package with now + one-way travel time
4. Keep the vehicle busy for the round trip to the farthest drop
5. Repeat until every package is out, or nothing left fits (STALLED)

Costs are computed once for every package before dispatch starts, so the
pricing never depends on the dispatch order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional

from . import config, offers
from .dispatch import select_shipment
from .models import (
    DeliveryRequest,
    DispatchStatus,
    Package,
    PackageStatus,
    Shipment,
    Vehicle,
)
from .reader import build_fleet
from .utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """
    Outcome of a dispatch run.

    Attributes:
        status: Terminal state of the simulation
        shipments: Trip log in dispatch order
        undelivered: Packages left at the depot by a stall
    """
    status: DispatchStatus
    shipments: List[Shipment] = field(default_factory=list)
    undelivered: List[Package] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """True unless the run stalled with packages left over."""
        return self.status != DispatchStatus.STALLED

    @property
    def makespan(self) -> float:
        """Hour at which the last vehicle is back at the depot."""
        return max((s.returns_at for s in self.shipments), default=0.0)


class DispatchSimulation:
    """
    Event-driven simulation of depot dispatch.

    The simulation owns the pending pool and the fleet for the duration of
    a run; the shipment selector only ever sees a snapshot of the pool.

    Attributes:
        packages: All packages, in input order
        vehicles: Fleet, in id order (empty for cost-only runs)
        base_delivery_cost: Flat per-run delivery cost
        pending: Packages not yet dispatched
        shipments: Trip log of the current run
    """

    def __init__(
        self,
        packages: List[Package],
        vehicles: List[Vehicle],
        base_delivery_cost: int,
    ) -> None:
        self.packages: List[Package] = packages
        self.vehicles: List[Vehicle] = vehicles
        self.base_delivery_cost: int = base_delivery_cost

        self.pending: List[Package] = []
        self.shipments: List[Shipment] = []

    @classmethod
    def from_request(cls, request: DeliveryRequest) -> "DispatchSimulation":
        """Build a simulation, and its fleet, from a parsed request."""
        vehicles: List[Vehicle] = []
        if request.has_fleet:
            fleet = request.fleet
            vehicles = build_fleet(fleet.vehicle_count, fleet.max_speed, fleet.max_weight)
        return cls(request.packages, vehicles, request.base_delivery_cost)

    def _reset(self) -> None:
        """Put packages and vehicles back in their pre-dispatch state."""
        self.pending = list(self.packages)
        self.shipments = []
        for package in self.packages:
            package.status = PackageStatus.PENDING
            package.delivery_time = None
            package.vehicle_id = None
        for vehicle in self.vehicles:
            vehicle.available_at = 0.0
            vehicle.trips = 0

    def _next_vehicle(self) -> Vehicle:
        """Vehicle back at the depot first; ties go to the lowest id."""
        return min(self.vehicles, key=lambda v: v.available_at)

    def _dispatch(self, vehicle: Vehicle, load: List[Package], now: float) -> Shipment:
        """
        Send a load out with a vehicle.

        Stamps delivery times, removes the load from the pending pool and
        moves the vehicle's clock to the end of its round trip.
        """
        shipment = Shipment(vehicle_id=vehicle.vehicle_id, departure=now, packages=load)

        for package in load:
            package.delivery_time = round_half_up(
                now + vehicle.travel_time(package.distance), config.TIME_DECIMALS
            )
            package.vehicle_id = vehicle.vehicle_id
            package.status = PackageStatus.DELIVERED
            self.pending.remove(package)

        vehicle.available_at = now + 2 * vehicle.travel_time(shipment.max_distance)
        vehicle.trips += 1
        shipment.returns_at = vehicle.available_at
        self.shipments.append(shipment)

        logger.debug(
            f"[{now:.2f}h] Vehicle {vehicle.vehicle_id} took {shipment.package_ids} "
            f"({shipment.total_weight}/{vehicle.max_weight}kg), back at {vehicle.available_at:.2f}h"
        )
        return shipment

    def _stall(self) -> List[Package]:
        """Mark every package still pending as undeliverable."""
        undelivered = list(self.pending)
        for package in undelivered:
            package.status = PackageStatus.UNDELIVERABLE
        logger.warning(
            f"Dispatch stalled: no vehicle can carry "
            f"{[p.package_id for p in undelivered]}"
        )
        return undelivered

    def run(self) -> DispatchResult:
        """
        Price every package, then dispatch the fleet until the pool is empty.

        Running the same simulation twice yields the same result.

        Returns:
            DispatchResult with the terminal status and trip log
        """
        offers.apply_costs(self.packages, self.base_delivery_cost)

        if not self.vehicles:
            logger.info(f"No fleet configured, priced {len(self.packages)} packages")
            return DispatchResult(status=DispatchStatus.SKIPPED)

        self._reset()
        if len(self.pending) > config.SELECTION_POOL_WARNING:
            logger.warning(
                f"Dispatching {len(self.pending)} packages; shipment selection "
                f"is exponential in the pending pool size"
            )

        undelivered: List[Package] = []
        status = DispatchStatus.COMPLETED

        while self.pending:
            vehicle = self._next_vehicle()
            now = vehicle.available_at

            load = select_shipment(self.pending, vehicle.max_weight)
            if not load:
                undelivered = self._stall()
                status = DispatchStatus.STALLED
                break

            self._dispatch(vehicle, load, now)

        result = DispatchResult(status=status, shipments=list(self.shipments), undelivered=undelivered)
        logger.info(
            f"Dispatch {status.value.lower()}: {len(self.shipments)} shipments, "
            f"{len(self.packages) - len(undelivered)}/{len(self.packages)} packages delivered"
        )
        return result


def run_request(request: DeliveryRequest) -> Optional[DispatchResult]:
    """
    Process a parsed request end to end.

    Returns:
        DispatchResult in dispatch mode, None in cost-only mode
    """
    if not request.has_fleet:
        offers.apply_costs(request.packages, request.base_delivery_cost)
        return None
    return DispatchSimulation.from_request(request).run()
