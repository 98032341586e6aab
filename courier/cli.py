# courier-dispatch/courier/cli.py
"""
Command-Line Interface for the Courier Dispatch service.

Reads a delivery request from stdin (or a file) and prints one line per
package with its discount, total cost and, when a fleet line is present,
its estimated delivery time.

Usage:
    courier-dispatch < request.txt            # Read from stdin
    courier-dispatch --input request.txt      # Read from a file
    courier-dispatch -i request.txt --table   # Also print summary tables
    courier-dispatch --verbose                # Log every dispatched shipment

Exit Codes:
    0: Success
    1: Input error
    2: Dispatch stalled (some packages could not be delivered)
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import IO, List, Optional

from . import config, report
from .models import DeliveryRequest, DispatchStatus
from .reader import RequestError, read_request
from .simulation import DispatchResult, run_request
from .writer import write_results

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Send log output to stderr so stdout carries only result lines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=config.LOG_FORMAT,
        stream=sys.stderr,
    )


def load_request_safe(path: Optional[str], stdin: IO[str]) -> Optional[DeliveryRequest]:
    """
    Load a request with graceful error handling.

    Args:
        path: Input file, or None to read stdin
        stdin: Stream used when no path is given

    Returns:
        Parsed request, or None if the input is missing, unreadable or
        malformed
    """
    if path is not None and not os.path.exists(path):
        logger.error(f"Input file not found: {path}")
        return None

    try:
        if path is None:
            return read_request(stdin)
        with open(path, "r", encoding="utf-8") as f:
            return read_request(f)
    except RequestError as e:
        logger.error(f"Invalid request: {e}")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read input: {e}")
        return None


def print_tables(request: DeliveryRequest, result: Optional[DispatchResult], out: IO[str]) -> None:
    """Print package and trip tables followed by the headline figures."""
    out.write("\n" + "=" * 60 + "\n")
    out.write(report.packages_frame(request.packages).to_string(index=False) + "\n")

    if result is not None and result.shipments:
        out.write("\n" + report.shipments_frame(result.shipments).to_string(index=False) + "\n")

    out.write("\n")
    for name, value in report.summarize(request.packages, result).items():
        out.write(f"  {name:<16} {value}\n")
    out.write("=" * 60 + "\n")


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    parser = argparse.ArgumentParser(
        description="Courier delivery cost and time estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input:
  base_delivery_cost no_of_packages
  pkg_id weight_kg distance_km offer_code     (one line per package)
  no_of_vehicles max_speed max_carriable_weight   (optional)

Examples:
  courier-dispatch < request.txt
  courier-dispatch --input request.txt --table
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Request file to read (default: stdin)"
    )

    parser.add_argument(
        "--table", "-t",
        action="store_true",
        help="Print package and shipment tables after the result lines"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every dispatched shipment to stderr"
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    request = load_request_safe(args.input, stdin)
    if request is None:
        return 1

    result = run_request(request)
    write_results(request.packages, stdout, with_times=result is not None)

    if args.table:
        print_tables(request, result, stdout)

    if result is not None and result.status == DispatchStatus.STALLED:
        logger.warning(
            f"{len(result.undelivered)} package(s) exceed every vehicle's capacity "
            f"and were not scheduled"
        )
        return 2

    return 0


