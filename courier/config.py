# courier-dispatch/courier/config.py
"""
Configuration parameters for the Courier Dispatch service.

This module centralizes the tunable constants used by the pricing and
dispatch engines, making it easy to:
- Adjust the delivery tariff
- Change rounding and output formatting
- Tune the limits that guard the brute-force shipment selector

The offer table itself is not configurable; it lives in ``offers.py``.
"""

from typing import Final, FrozenSet

# =============================================================================
# TARIFF
# =============================================================================

WEIGHT_RATE: Final[int] = 10
"""Cost added per unit of package weight (kg)."""

DISTANCE_RATE: Final[int] = 5
"""Cost added per unit of delivery distance (km)."""

# =============================================================================
# ROUNDING AND OUTPUT
# =============================================================================

AMOUNT_DECIMALS: Final[int] = 2
"""Decimal places kept on a computed discount before it is subtracted."""

TIME_DECIMALS: Final[int] = 2
"""Decimal places kept on an estimated delivery time (hours)."""

UNDELIVERABLE_MARKER: str = "N/A"
"""Printed in the time column for packages no vehicle can carry."""

# =============================================================================
# INPUT
# =============================================================================

NO_OFFER_CODES: FrozenSet[str] = frozenset({"NA", "N/A", "NONE", "-"})
"""
Offer-code tokens that explicitly mean "no offer".
Any other unknown code also yields no discount; these are just accepted
without a debug log entry.
"""

# =============================================================================
# SHIPMENT SELECTION
# =============================================================================

SELECTION_POOL_WARNING: int = 20
"""
Pending-pool size above which the selector logs a scaling warning.
Selection enumerates subsets, so cost grows as O(2^n) in the pool size.
"""

# =============================================================================
# LOGGING
# =============================================================================

LOG_FORMAT: str = "%(levelname)s %(name)s: %(message)s"
"""Format used by the CLI when it configures the root logger."""
