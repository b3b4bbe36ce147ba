"""Preimage tree calculation."""

from typing import List, Tuple

import structlog

from api.src.calculation.fractals import ComplexFractal
from shared.tracing import trace_function

logger = structlog.get_logger(__name__)

MAX_NUMBERS = 1 << 10


@trace_function("calculate_preimage_tree")
def calculate(
    fractal: ComplexFractal,
    z0: complex,
    max_depth: int,
    max_numbers: int = MAX_NUMBERS,
) -> List[complex]:
    """Collect the preimage tree of ``z0`` in depth first pre-order.

    Every point is followed by the subtrees of its preimages. The tree has
    ``max_depth`` levels, so ``z0`` alone is returned for depth 1.

    Args:
        fractal: Map whose preimages are followed
        z0: Root of the tree
        max_depth: Number of levels, at least 1
        max_numbers: Upper bound for ``dimensions ** max_depth``

    Returns:
        All tree nodes

    Raises:
        ValueError: Depth below 1 or tree too large
    """
    if max_depth < 1:
        raise ValueError("Maximal recursion depth should be at least 1.")

    # every level holds at least one point
    if max_depth > max_numbers:
        raise ValueError(
            f"Number of needed calculations (at least {max_depth}) exceeds {max_numbers}."
        )

    dimensions = fractal.dimensions
    if dimensions > 1 and max_depth > max_numbers.bit_length():
        raise ValueError(
            f"Number of needed calculations ({dimensions}^{max_depth}) exceeds {max_numbers}."
        )

    needed = dimensions ** max_depth
    if needed > max_numbers:
        raise ValueError(
            f"Number of needed calculations ({needed}) exceeds {max_numbers}."
        )

    numbers = _collect(fractal, complex(z0), max_depth)

    logger.debug(
        "preimage_tree_calculated",
        fractal=repr(fractal),
        depth=max_depth,
        points=len(numbers),
    )
    return numbers


def _collect(fractal: ComplexFractal, z0: complex, max_depth: int) -> List[complex]:
    numbers: List[complex] = []
    stack: List[Tuple[complex, int]] = [(z0, max_depth)]

    while stack:
        z, depth = stack.pop()
        numbers.append(z)
        if depth > 1:
            # reversed so the first preimage is visited first
            stack.extend((w, depth - 1) for w in reversed(fractal.pre_images(z)))

    return numbers
