"""
Fractal music image endpoints.

Provides PNG images of:
- Preimage trees of the square map ``w^2 + c``
- Preimage trees of arbitrary polynomial maps
- A static sample image
"""

import cmath
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.src.config import Settings, get_settings
from api.src.dependencies import get_fractal_service
from api.src.models.responses import ErrorResponse
from api.src.services.fractal_service import FractalService, SampleImageNotFound
from api.src.utils.number_helper import parse_complex

logger = structlog.get_logger(__name__)

PNG_RESPONSE = {200: {"content": {"image/png": {}}, "description": "PNG image"}}

DEFAULT_DEPTH = 10
DEFAULT_POLYNOMIAL_DEPTH = 6
DEFAULT_POLYNOMIAL = ["1", "0", "1"]

router = APIRouter(
    prefix="/fractal-music",
    tags=["Fractal Music"],
    responses={
        400: {"model": ErrorResponse, "description": "Calculation rejected"},
        422: {"model": ErrorResponse, "description": "Validation Error"}
    }
)


@router.get(
    "/png",
    response_class=Response,
    responses=PNG_RESPONSE,
    summary="Square fractal",
)
def square_png(
    n: Optional[int] = Query(default=None, description="Depth of the preimage tree"),
    c0: Optional[str] = Query(default=None, description="Constant c of w^2 + c, defaults to i"),
    z0: Optional[str] = Query(default=None, description="Root of the preimage tree, defaults to 1"),
    settings: Settings = Depends(get_settings),
    service: FractalService = Depends(get_fractal_service),
) -> Response:
    """
    Render the preimage tree of ``z0`` under ``w^2 + c0``.

    Unparsable numbers fall back to their defaults.
    """
    c = parse_complex(c0, complex(0.0, 1.0), settings.decimal_separator)
    z = parse_complex(z0, complex(1.0, 0.0), settings.decimal_separator)
    depth = DEFAULT_DEPTH if n is None else n

    data = service.square_png(depth, c, z)
    return Response(content=data, media_type="image/png")


@router.get(
    "/polynomial/png",
    response_class=Response,
    responses=PNG_RESPONSE,
    summary="Polynomial fractal",
)
def polynomial_png(
    c: Optional[List[str]] = Query(
        default=None,
        description="Polynomial coefficients, highest order first (repeat the parameter)"
    ),
    z0: Optional[str] = Query(default=None, description="Root of the preimage tree, defaults to 1"),
    n: Optional[int] = Query(default=None, description="Depth of the preimage tree"),
    settings: Settings = Depends(get_settings),
    service: FractalService = Depends(get_fractal_service),
) -> Response:
    """
    Render the preimage tree of ``z0`` under the polynomial ``c``.

    Unlike the other numbers, coefficients that cannot be parsed are
    rejected, since there is no sensible default for them.
    """
    raw = c or DEFAULT_POLYNOMIAL
    coefficients = []
    for text in raw:
        value = parse_complex(text, complex("nan"), settings.decimal_separator)
        if cmath.isnan(value):
            logger.warning("invalid_polynomial_coefficient", coefficient=text)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid coefficient: {text}"
            )
        coefficients.append(value)

    z = parse_complex(z0, complex(1.0, 0.0), settings.decimal_separator)
    depth = DEFAULT_POLYNOMIAL_DEPTH if n is None else n

    data = service.polynomial_png(coefficients, z, depth)
    return Response(content=data, media_type="image/png")


@router.get(
    "/sample/png/",
    response_class=Response,
    responses={**PNG_RESPONSE, 404: {"model": ErrorResponse, "description": "No sample image"}},
    summary="Sample image",
)
def sample_png(service: FractalService = Depends(get_fractal_service)) -> Response:
    """Return the configured sample image unchanged."""
    try:
        data = service.sample_png()
    except SampleImageNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(content=data, media_type="image/png")
