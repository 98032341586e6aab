import pytest
import hypothesis.strategies as st
from hypothesis import given, settings

from courier.models import Package
from courier.offers import OFFERS, apply_costs, calculate_cost, find_offer


def test_offer_table_codes_are_unique_and_ordered():
    assert [o.code for o in OFFERS] == ["R1", "R2", "R3"]


def test_find_offer_known_code():
    offer = find_offer("R2")
    assert offer is not None
    assert offer.discount_percent == 7


@pytest.mark.parametrize("code", [None, "", "R9", "NA", "r1"])
def test_find_offer_missing_or_unknown_code(code):
    assert find_offer(code) is None


def test_base_cost_formula():
    # 100 + 50*10 + 30*5
    assert Package("PKG1", 50, 30).base_cost(100) == 750


def test_matching_code_outside_weight_range_gets_no_discount():
    package = Package("PKG1", 50, 30, "R1")
    assert calculate_cost(package, 100) == (0, 750)
    assert package.discount == 0
    assert package.total_cost == 750


def test_applicable_offer_discount_rounded_before_subtracting():
    package = Package("PKG2", 75, 125, "R1")
    discount, total = calculate_cost(package, 100)
    # 10% of 1475
    assert discount == pytest.approx(147.5)
    assert total == pytest.approx(1327.5)


def test_r3_discount():
    package = Package("PKG3", 10, 100, "R3")
    assert calculate_cost(package, 100) == (35, 665)


def test_discount_rounded_to_two_places():
    # base 100 + 1000 + 255 = 1355; 7% = 94.85
    package = Package("P", 100, 51, "R2")
    discount, total = calculate_cost(package, 100)
    assert discount == pytest.approx(94.85)
    assert total == pytest.approx(1355 - 94.85)


@pytest.mark.parametrize(
    "weight, distance, expected_applies",
    [
        (70, 0, True),      # lower bounds inclusive
        (200, 199, True),   # weight upper bound inclusive
        (100, 200, False),  # distance upper bound exclusive
        (69, 100, False),
        (201, 100, False),
    ],
)
def test_r1_range_boundaries(weight, distance, expected_applies):
    package = Package("P", weight, distance, "R1")
    discount, _ = calculate_cost(package, 0)
    assert (discount > 0) is expected_applies


@pytest.mark.parametrize(
    "code, weight, distance",
    [
        ("R2", 100, 50),
        ("R2", 250, 150),
        ("R3", 10, 50),
        ("R3", 150, 250),
    ],
)
def test_inclusive_upper_and_lower_bounds(code, weight, distance):
    package = Package("P", weight, distance, code)
    discount, _ = calculate_cost(package, 0)
    assert discount > 0


def test_apply_costs_is_idempotent(sample_packages):
    apply_costs(sample_packages, 100)
    first = [(p.discount, p.total_cost) for p in sample_packages]
    apply_costs(sample_packages, 100)
    assert [(p.discount, p.total_cost) for p in sample_packages] == first


@settings(max_examples=200)
@given(
    weight=st.integers(min_value=0, max_value=400),
    distance=st.integers(min_value=0, max_value=400),
    code=st.sampled_from(["R1", "R2", "R3", "XX", None]),
    base=st.integers(min_value=0, max_value=1000),
)
def test_discount_bounded_and_total_consistent(weight, distance, code, base):
    package = Package("P", weight, distance, code)
    discount, total = calculate_cost(package, base)
    base_cost = package.base_cost(base)
    assert 0 <= discount <= base_cost
    assert total == base_cost - discount
    assert total >= 0
