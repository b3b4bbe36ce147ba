"""Helpers shared by the routers."""

from api.src.utils.number_helper import parse_complex

__all__ = ["parse_complex"]
