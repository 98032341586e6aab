import pytest

from courier.models import Package, Vehicle
from courier.reader import build_fleet
from tests.utils.builders import make_packages


SAMPLE_COST_REQUEST = """100 3
PKG1 5 5 R1
PKG2 15 5 R2
PKG3 10 100 R3
"""

SAMPLE_DISPATCH_REQUEST = """100 5
PKG1 50 30 R1
PKG2 75 125 R8
PKG3 175 100 R3
PKG4 110 60 R2
PKG5 155 95 NA
2 70 200
"""


@pytest.fixture
def sample_cost_request():
    """Three packages, no fleet line."""
    return SAMPLE_COST_REQUEST


@pytest.fixture
def sample_dispatch_request():
    """Five packages and two 200kg vehicles at 70km/h."""
    return SAMPLE_DISPATCH_REQUEST


@pytest.fixture
def sample_packages():
    """The packages of the dispatch sample, as records."""
    return [
        Package("PKG1", 50, 30, "R1"),
        Package("PKG2", 75, 125, "R8"),
        Package("PKG3", 175, 100, "R3"),
        Package("PKG4", 110, 60, "R2"),
        Package("PKG5", 155, 95, None),
    ]


@pytest.fixture
def two_vehicle_fleet():
    return build_fleet(2, 70, 200)


@pytest.fixture
def package_factory():
    return make_packages


@pytest.fixture
def single_vehicle():
    def _make(max_weight=200, speed=70):
        return [Vehicle(vehicle_id=1, max_weight=max_weight, speed=speed)]
    return _make
