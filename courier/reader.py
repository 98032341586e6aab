# courier-dispatch/courier/reader.py
"""
Request reader for the Courier Dispatch service.

Parses the line-oriented text input into validated records:

    base_delivery_cost no_of_packages
    pkg_id weight distance [offer_code]     (repeated no_of_packages times)
    no_of_vehicles max_speed max_weight     (optional)

A missing fleet line, or a blank line in its place, selects cost-only
mode; the blank line ends the request and nothing after it is read.
Any malformation is fatal and raises RequestError naming the line.
"""

from __future__ import annotations

import logging
from typing import IO, Iterable, List, Optional, Set

from . import config
from .models import DeliveryRequest, FleetSpec, Package, Vehicle

logger = logging.getLogger(__name__)


class RequestError(ValueError):
    """Raised when the input cannot be turned into a valid request."""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


def _parse_int(token: str, name: str, line_no: int, minimum: int = 0) -> int:
    """Parse a non-negative (or >= minimum) integer field of plain ASCII digits."""
    digits = token[1:] if token.startswith("-") else token
    if not (digits.isascii() and digits.isdigit()):
        raise RequestError(f"{name} must be an integer, got {token!r}", line_no)
    value = int(token)
    if value < minimum:
        raise RequestError(f"{name} must be >= {minimum}, got {value}", line_no)
    return value


def _parse_package(line: str, line_no: int) -> Package:
    tokens = line.split()
    if len(tokens) not in (3, 4):
        raise RequestError(
            f"expected 'pkg_id weight distance [offer_code]', got {line.strip()!r}", line_no
        )

    offer_code: Optional[str] = tokens[3] if len(tokens) == 4 else None
    if offer_code is not None and offer_code.upper() in config.NO_OFFER_CODES:
        offer_code = None

    return Package(
        package_id=tokens[0],
        weight=_parse_int(tokens[1], "weight", line_no),
        distance=_parse_int(tokens[2], "distance", line_no),
        offer_code=offer_code,
    )


def _parse_fleet(line: str, line_no: int) -> FleetSpec:
    tokens = line.split()
    if len(tokens) != 3:
        raise RequestError(
            f"expected 'no_of_vehicles max_speed max_weight', got {line.strip()!r}", line_no
        )
    return FleetSpec(
        vehicle_count=_parse_int(tokens[0], "no_of_vehicles", line_no),
        max_speed=_parse_int(tokens[1], "max_speed", line_no, minimum=1),
        max_weight=_parse_int(tokens[2], "max_weight", line_no),
    )


def parse_request(lines: Iterable[str]) -> DeliveryRequest:
    """
    Parse input lines into a DeliveryRequest.

    Args:
        lines: Input lines, with or without trailing newlines

    Returns:
        DeliveryRequest with packages in input order and the fleet, if any

    Raises:
        RequestError: On a missing or malformed header, package or fleet
            line, duplicate package ids, or input after the fleet line
    """
    rows: List[str] = [line.rstrip("\r\n") for line in lines]
    if not rows or not rows[0].strip():
        raise RequestError("missing header 'base_delivery_cost no_of_packages'", 1)

    header = rows[0].split()
    if len(header) != 2:
        raise RequestError(
            f"expected 'base_delivery_cost no_of_packages', got {rows[0].strip()!r}", 1
        )
    base_delivery_cost = _parse_int(header[0], "base_delivery_cost", 1)
    package_count = _parse_int(header[1], "no_of_packages", 1)

    packages: List[Package] = []
    seen_ids: Set[str] = set()
    for index in range(1, package_count + 1):
        if index >= len(rows):
            raise RequestError(f"expected {package_count} package lines, got {index - 1}")
        package = _parse_package(rows[index], index + 1)
        if package.package_id in seen_ids:
            raise RequestError(f"duplicate package id {package.package_id!r}", index + 1)
        seen_ids.add(package.package_id)
        packages.append(package)

    # A blank line where the fleet record goes ends the request
    fleet: Optional[FleetSpec] = None
    fleet_index = package_count + 1
    if fleet_index < len(rows) and rows[fleet_index].strip():
        fleet = _parse_fleet(rows[fleet_index], fleet_index + 1)
        for index in range(fleet_index + 1, len(rows)):
            if rows[index].strip():
                raise RequestError(f"unexpected trailing input {rows[index].strip()!r}", index + 1)

    if fleet is not None and fleet.vehicle_count == 0:
        logger.info("Fleet line lists no vehicles, computing costs only")

    logger.debug(
        f"Read {len(packages)} packages, base cost {base_delivery_cost}, "
        f"fleet={'none' if fleet is None else fleet}"
    )
    return DeliveryRequest(base_delivery_cost=base_delivery_cost, packages=packages, fleet=fleet)


def read_request(stream: IO[str]) -> DeliveryRequest:
    """Read and parse a whole request from a text stream."""
    return parse_request(stream.read().splitlines())


def build_fleet(vehicle_count: int, max_speed: int, max_weight: int) -> List[Vehicle]:
    """
    Create a uniform fleet.

    Returns:
        Vehicles with ids 1..vehicle_count sharing speed and capacity
    """
    return [
        Vehicle(vehicle_id=i + 1, max_weight=max_weight, speed=max_speed)
        for i in range(vehicle_count)
    ]
