"""Parsing complex numbers from query parameters."""

import re
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)

_NUMBER = r"(?:\d+(?:{sep}\d*)?|{sep}\d+)(?:[eE][+-]?\d+)?"


def _pattern(decimal_separator: str) -> "re.Pattern[str]":
    number = _NUMBER.format(sep=re.escape(decimal_separator))
    return re.compile(
        rf"""
        ^\s*
        (?:
            (?P<re_sign>[+-]?)\s*(?P<re>{number})                    # real part
            (?:\s*(?P<im_op>[+-])\s*(?P<im>{number})?\s*\*?\s*[ij])?  # optional imaginary part
          |
            (?P<im_sign>[+-]?)\s*(?P<im_only>{number})?\s*\*?\s*[ij] # imaginary only
        )
        \s*$
        """,
        re.VERBOSE,
    )


_PATTERNS = {sep: _pattern(sep) for sep in (".", ",")}


def _to_float(text: str, decimal_separator: str) -> float:
    return float(text.replace(decimal_separator, "."))


def parse_complex(
    text: Optional[str],
    default: complex,
    decimal_separator: str = ".",
) -> complex:
    """Parse ``text`` as a complex number, falling back to ``default``.

    Accepts the forms ``a``, ``bi``, ``i``, ``a + bi`` and ``a - bi`` with
    optional blanks, ``i`` or ``j`` as the imaginary unit and ``.`` or ``,``
    as decimal separator.

    Args:
        text: Raw parameter value, may be None
        default: Value used when ``text`` is missing or malformed
        decimal_separator: Either "." or ","

    Returns:
        The parsed number or ``default``
    """
    if text is None:
        return default

    match = _PATTERNS[decimal_separator].match(text)
    if match is None:
        logger.debug("complex_parse_failed", text=text, default=str(default))
        return default

    if match.group("re") is not None:
        real = _to_float(match.group("re"), decimal_separator)
        if match.group("re_sign") == "-":
            real = -real

        imag = 0.0
        if match.group("im_op") is not None:
            im = match.group("im")
            imag = _to_float(im, decimal_separator) if im else 1.0
            if match.group("im_op") == "-":
                imag = -imag
        return complex(real, imag)

    im = match.group("im_only")
    imag = _to_float(im, decimal_separator) if im else 1.0
    if match.group("im_sign") == "-":
        imag = -imag
    return complex(0.0, imag)
