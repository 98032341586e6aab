# courier-dispatch/courier/offers.py
"""
Discount engine for the Courier Dispatch service.

Prices a package with the flat tariff and applies at most one offer:

    base cost = base delivery cost + weight * 10 + distance * 5

The offer table is a closed, ordered set checked by linear scan. An offer
applies only when its code matches the package's code AND both the weight
and the distance fall inside the offer's ranges. Unknown, missing or
inapplicable codes are a normal case and simply yield no discount.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from . import config
from .models import Offer, Package, Range
from .utils import round_half_up

logger = logging.getLogger(__name__)


# Offer table. Order matters only for lookup; codes are unique.
OFFERS: Tuple[Offer, ...] = (
    Offer("R1", 10, distance_range=Range(0, 200, include_hi=False), weight_range=Range(70, 200)),
    Offer("R2", 7, distance_range=Range(50, 150), weight_range=Range(100, 250)),
    Offer("R3", 5, distance_range=Range(50, 250), weight_range=Range(10, 150)),
)


def find_offer(code: Optional[str]) -> Optional[Offer]:
    """
    Look up an offer by its code.

    Args:
        code: Offer code from the request, may be None

    Returns:
        The matching offer, or None for missing or unknown codes
    """
    if not code:
        return None
    for offer in OFFERS:
        if offer.code == code:
            return offer
    if code.upper() not in config.NO_OFFER_CODES:
        logger.debug(f"Unknown offer code {code!r}, no discount applied")
    return None


def calculate_discount(package: Package, base_cost: float) -> float:
    """
    Discount a package is entitled to for the given base cost.

    Returns 0 when no offer matches or the matching offer's ranges do not
    admit the package; otherwise the percentage of the base cost rounded
    half-up to ``config.AMOUNT_DECIMALS`` places.
    """
    offer = find_offer(package.offer_code)
    if offer is None:
        return 0
    if not offer.is_applicable(package.weight, package.distance):
        logger.debug(f"Offer {offer.code} not applicable to {package.package_id}")
        return 0
    return round_half_up(base_cost * offer.discount_percent / 100, config.AMOUNT_DECIMALS)


def calculate_cost(package: Package, base_delivery_cost: int) -> Tuple[float, float]:
    """
    Price a package and record the result on it.

    The discount is rounded before it is subtracted from the base cost.

    Args:
        package: Package to price (mutated in place)
        base_delivery_cost: Flat per-run delivery cost

    Returns:
        Tuple of (discount, total_cost)
    """
    base_cost = package.base_cost(base_delivery_cost)
    discount = calculate_discount(package, base_cost)
    package.discount = discount
    package.total_cost = base_cost - discount
    return package.discount, package.total_cost


def apply_costs(packages: Iterable[Package], base_delivery_cost: int) -> None:
    """Price every package in the batch. Safe to call repeatedly."""
    for package in packages:
        calculate_cost(package, base_delivery_cost)
