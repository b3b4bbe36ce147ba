"""Backtrace trees: points spreading out around their parent on shrinking circles."""

import cmath
import math
from dataclasses import dataclass, field
from typing import List

from shared.tracing import trace_function

MAX_VALUES = 10_000_000


@dataclass(frozen=True)
class ExtendedComplex:
    """A complex number tagged with its position in a backtrace tree.

    Only ``id`` and ``depth`` take part in equality and hashing.
    """

    id: int
    depth: int
    number: complex = field(compare=False)


def check_size(imax: int, spread: int, max_values: int = MAX_VALUES) -> None:
    """Reject trees whose leaf count ``spread ** imax`` reaches ``max_values``."""
    if spread ** imax >= max_values:
        raise ValueError("Too many values to calculate.")


@trace_function("calculate_backtrace")
def backtrace(imax: int, spread: int) -> List[ExtendedComplex]:
    """Build the backtrace tree rooted at the origin.

    Every node above depth ``imax`` gets ``spread`` children placed evenly
    on a circle of radius ``0.5 ** depth`` around it. The circle is turned
    by ``pi / spread`` per level.

    Args:
        imax: Number of levels
        spread: Children per node

    Returns:
        Nodes in depth first pre-order
    """
    nodes: List[ExtendedComplex] = []
    _backtrace(nodes, ExtendedComplex(0, 0, complex(0.0, 0.0)), 0, imax, spread)
    return nodes


def _backtrace(nodes: List[ExtendedComplex], z: ExtendedComplex, depth: int, imax: int, spread: int) -> None:
    if depth >= imax:
        return

    nodes.append(z)

    phi0 = math.pi / spread * depth
    r0 = 0.5 ** depth

    for k in range(spread):
        phi = math.pi * 2 * k / spread + phi0
        w = z.number + cmath.rect(r0, phi)
        _backtrace(nodes, ExtendedComplex(k, depth, w), depth + 1, imax, spread)
