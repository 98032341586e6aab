# courier-dispatch/courier/dispatch.py
"""
Shipment selection for the Courier Dispatch service.

Given the pool of packages still waiting at the depot and one vehicle's
capacity, picks the single best load for that vehicle. Candidates are
ranked lexicographically:

1. **Most packages**: deliver as many parcels per trip as possible.
2. **Heaviest load**: among equal counts, use the capacity best.
3. **Nearest farthest drop**: among equal weights, return soonest.

Ties after all three keep the first candidate in ``itertools.combinations``
order, so the result depends only on the pool order and is fully
deterministic.

Complexity is O(2^n) in the pool size. Pools are expected to be small; the
simulation logs a warning once per run above
``config.SELECTION_POOL_WARNING`` rather than switching to a heuristic with
different tie-breaks.
"""

from __future__ import annotations

from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from .models import Package


def shipment_rank(packages: Sequence[Package]) -> Tuple[int, int, int]:
    """
    Ranking key for a candidate load; larger is better.

    Returns:
        Tuple of (package_count, total_weight, -max_distance)
    """
    return (
        len(packages),
        sum(p.weight for p in packages),
        -max(p.distance for p in packages),
    )


def max_shipment_size(packages: Sequence[Package], capacity: float) -> int:
    """
    Largest number of packages that fit together under the capacity.

    A subset of size k fits if and only if the k lightest packages fit, so
    this is a prefix count over the weights in ascending order.
    """
    size = 0
    load = 0
    for weight in sorted(p.weight for p in packages):
        load += weight
        if load > capacity:
            break
        size += 1
    return size


def select_shipment(packages: Sequence[Package], capacity: float) -> List[Package]:
    """
    Choose the best load for one vehicle from the pending pool.

    Only subsets of the largest feasible size are enumerated: every smaller
    subset loses on package count, and within one size the enumeration
    order is the same as a full smallest-first scan, so the winner is the
    one the exhaustive search would return.

    The input is never mutated.

    Args:
        packages: Pending packages, in pool order
        capacity: Vehicle weight capacity

    Returns:
        Chosen packages in pool order, or an empty list when every
        package on its own is heavier than the capacity
    """
    pool = list(packages)
    if not pool:
        return []

    size = max_shipment_size(pool, capacity)
    if size == 0:
        return []

    best: Optional[Tuple[Package, ...]] = None
    best_rank: Optional[Tuple[int, int, int]] = None

    for combo in combinations(pool, size):
        if sum(p.weight for p in combo) > capacity:
            continue
        rank = shipment_rank(combo)
        # Strictly better only, so the earliest combination wins ties
        if best_rank is None or rank > best_rank:
            best = combo
            best_rank = rank

    return list(best) if best is not None else []
