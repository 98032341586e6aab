# courier-dispatch/courier/writer.py
"""
Result writer for the Courier Dispatch service.

Formats priced (and optionally dispatched) packages as output lines, one
per package in input order:

    cost-only:  pkg_id discount total_cost
    dispatch:   pkg_id discount total_cost delivery_time

Amounts are rounded half-up to whole numbers. Delivery times keep two
decimals in their shortest form. Packages a stalled dispatch could not
deliver show ``config.UNDELIVERABLE_MARKER`` instead of a time.
"""

from __future__ import annotations

from typing import IO, Iterable, List

from . import config
from .models import Package
from .utils import format_amount, format_hours


def format_cost_line(package: Package) -> str:
    """Output line with the package's discount and total cost."""
    return f"{package.package_id} {format_amount(package.discount)} {format_amount(package.total_cost)}"


def format_time_line(package: Package) -> str:
    """Output line with cost columns plus the estimated delivery time."""
    if package.delivery_time is None:
        time_column = config.UNDELIVERABLE_MARKER
    else:
        time_column = format_hours(package.delivery_time, config.TIME_DECIMALS)
    return f"{format_cost_line(package)} {time_column}"


def format_results(packages: Iterable[Package], with_times: bool) -> List[str]:
    """Format every package, preserving input order."""
    formatter = format_time_line if with_times else format_cost_line
    return [formatter(package) for package in packages]


def write_results(packages: Iterable[Package], stream: IO[str], with_times: bool) -> None:
    """Write one line per package to a text stream."""
    for line in format_results(packages, with_times):
        stream.write(line + "\n")
