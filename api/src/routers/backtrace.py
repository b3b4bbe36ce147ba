"""Backtrace image endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.src.dependencies import get_fractal_service
from api.src.models.responses import ErrorResponse
from api.src.services.fractal_service import FractalService

IMAX_DEFAULT, IMAX_MIN, IMAX_MAX = 10, 2, 12
SPREAD_DEFAULT, SPREAD_MIN, SPREAD_MAX = 2, 2, 10

router = APIRouter(
    prefix="/btm",
    tags=["Backtrace"],
    responses={400: {"model": ErrorResponse, "description": "Calculation rejected"}}
)


def clamp(value: Optional[int], default: int, lower: int, upper: int) -> int:
    """Replace a missing value by ``default`` and clamp it into ``[lower, upper]``."""
    if value is None:
        value = default
    return min(upper, max(lower, value))


@router.get(
    "/png",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}, "description": "PNG image"}},
    summary="Backtrace tree",
)
def backtrace_png(
    imax: Optional[int] = Query(default=None, description="Number of levels, 2 to 12"),
    spread: Optional[int] = Query(default=None, description="Children per node, 2 to 10"),
    service: FractalService = Depends(get_fractal_service),
) -> Response:
    """
    Render a backtrace tree.

    Out of range parameters are clamped instead of rejected.
    """
    levels = clamp(imax, IMAX_DEFAULT, IMAX_MIN, IMAX_MAX)
    children = clamp(spread, SPREAD_DEFAULT, SPREAD_MIN, SPREAD_MAX)

    data = service.backtrace_png(levels, children)
    return Response(content=data, media_type="image/png")
