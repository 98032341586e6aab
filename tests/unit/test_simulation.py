from collections import defaultdict

import pytest
import hypothesis.strategies as st
from hypothesis import given, settings

from courier.models import DispatchStatus, Package, PackageStatus
from courier.reader import build_fleet, parse_request
from courier.simulation import DispatchSimulation, run_request
from tests.utils.builders import ids, make_packages


def test_sample_dispatch_times_and_costs(sample_packages, two_vehicle_fleet):
    result = DispatchSimulation(sample_packages, two_vehicle_fleet, 100).run()

    assert result.status == DispatchStatus.COMPLETED
    times = {p.package_id: p.delivery_time for p in sample_packages}
    assert times == {
        "PKG1": pytest.approx(4.0),
        "PKG2": pytest.approx(1.79),
        "PKG3": pytest.approx(1.43),
        "PKG4": pytest.approx(0.86),
        "PKG5": pytest.approx(4.21),
    }
    pkg4 = sample_packages[3]
    assert (pkg4.discount, pkg4.total_cost) == (105, 1395)


def test_sample_trip_log(sample_packages, two_vehicle_fleet):
    result = DispatchSimulation(sample_packages, two_vehicle_fleet, 100).run()

    assert [(s.vehicle_id, s.package_ids) for s in result.shipments] == [
        (1, ["PKG2", "PKG4"]),
        (2, ["PKG3"]),
        (2, ["PKG5"]),
        (1, ["PKG1"]),
    ]
    # Vehicle 1 returns after twice the 125km leg
    assert result.shipments[0].returns_at == pytest.approx(2 * 125 / 70)
    # Vehicle 2 is out last: 100km trip, then the 95km trip
    assert result.makespan == pytest.approx(2 * 100 / 70 + 2 * 95 / 70)
    assert [v.trips for v in two_vehicle_fleet] == [2, 2]


def test_first_vehicle_wins_ties_on_availability(package_factory):
    fleet = build_fleet(3, 10, 100)
    packages = package_factory([(60, 10), (60, 20), (60, 30)])
    result = DispatchSimulation(packages, fleet, 0).run()
    assert [s.vehicle_id for s in result.shipments] == [1, 2, 3]
    # Equal loads: the one with the nearest farthest drop goes first
    assert [s.package_ids for s in result.shipments] == [["P0"], ["P1"], ["P2"]]


def test_later_shipments_wait_for_a_returning_vehicle(package_factory):
    fleet = build_fleet(1, 10, 100)
    packages = package_factory([(80, 20), (80, 10)])
    result = DispatchSimulation(packages, fleet, 0).run()

    first, second = result.shipments
    assert first.package_ids == ["P1"]
    assert second.departure == pytest.approx(first.returns_at)
    assert packages[0].delivery_time == pytest.approx(2.0 + 2.0)


def test_oversized_package_stalls_dispatch(single_vehicle):
    heavy = Package("HEAVY", 250, 10)
    light = Package("LIGHT", 50, 70)
    result = DispatchSimulation([heavy, light], single_vehicle(), 100).run()

    assert result.status == DispatchStatus.STALLED
    assert not result.completed
    assert ids(result.undelivered) == ["HEAVY"]
    assert heavy.status == PackageStatus.UNDELIVERABLE
    assert heavy.delivery_time is None
    assert light.status == PackageStatus.DELIVERED
    assert light.delivery_time == pytest.approx(1.0)
    # Costs are still computed for every package
    assert heavy.total_cost == 100 + 2500 + 50


def test_stall_is_logged(single_vehicle, caplog):
    with caplog.at_level("WARNING", logger="courier.simulation"):
        DispatchSimulation([Package("HEAVY", 250, 10)], single_vehicle(), 0).run()
    assert "HEAVY" in caplog.text


def test_large_pool_warns_once_per_run(caplog):
    # One package per trip, so more than 20 stay pending for many rounds
    packages = make_packages([(1, 1)] * 46)
    with caplog.at_level("WARNING", logger="courier.simulation"):
        result = DispatchSimulation(packages, build_fleet(1, 10, 1), 0).run()

    assert len(result.shipments) == 46
    warnings = [r for r in caplog.records if "exponential" in r.getMessage()]
    assert len(warnings) == 1


def test_no_fleet_skips_dispatch(sample_packages):
    result = DispatchSimulation(sample_packages, [], 100).run()
    assert result.status == DispatchStatus.SKIPPED
    assert result.shipments == []
    assert all(p.delivery_time is None for p in sample_packages)
    assert sample_packages[0].total_cost == 750


def test_run_twice_gives_same_result(sample_packages, two_vehicle_fleet):
    sim = DispatchSimulation(sample_packages, two_vehicle_fleet, 100)
    first = sim.run()
    first_times = [p.delivery_time for p in sample_packages]
    second = sim.run()
    assert [p.delivery_time for p in sample_packages] == first_times
    assert [s.package_ids for s in second.shipments] == [s.package_ids for s in first.shipments]


def test_run_request_cost_only(sample_cost_request):
    request = parse_request(sample_cost_request.splitlines())
    assert run_request(request) is None
    assert [(p.discount, p.total_cost) for p in request.packages] == [
        (0, 175), (0, 275), (35, 665),
    ]


def test_run_request_with_fleet(sample_dispatch_request):
    request = parse_request(sample_dispatch_request.splitlines())
    result = run_request(request)
    assert result.status == DispatchStatus.COMPLETED
    assert len(result.shipments) == 4


fleet_specs = st.tuples(
    st.integers(min_value=1, max_value=3),    # vehicles
    st.integers(min_value=1, max_value=100),  # speed
    st.integers(min_value=0, max_value=120),  # capacity
)
package_specs = st.lists(
    st.tuples(st.integers(min_value=0, max_value=100), st.integers(min_value=0, max_value=200)),
    max_size=7,
)


@settings(max_examples=100, deadline=None)
@given(fleet=fleet_specs, specs=package_specs)
def test_dispatch_invariants(fleet, specs):
    count, speed, capacity = fleet
    vehicles = build_fleet(count, speed, capacity)
    packages = make_packages(specs)
    result = DispatchSimulation(packages, vehicles, 10).run()

    # Every package in at most one shipment, delivered ones in exactly one
    shipped = [p for s in result.shipments for p in s.packages]
    assert len(shipped) == len(set(map(id, shipped)))
    delivered = [p for p in packages if p.status == PackageStatus.DELIVERED]
    assert set(map(id, shipped)) == set(map(id, delivered))
    assert len(delivered) + len(result.undelivered) == len(packages)

    for shipment in result.shipments:
        assert shipment.total_weight <= capacity

    # Each vehicle's clock only moves forward
    per_vehicle = defaultdict(list)
    for shipment in result.shipments:
        per_vehicle[shipment.vehicle_id].append(shipment)
    for trips in per_vehicle.values():
        for earlier, later in zip(trips, trips[1:]):
            assert later.departure >= earlier.returns_at
        for trip in trips:
            assert trip.returns_at >= trip.departure

    if result.status == DispatchStatus.STALLED:
        assert all(p.weight > capacity for p in result.undelivered)
    else:
        assert result.undelivered == []
