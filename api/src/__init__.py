"""FastAPI service rendering fractal point clouds as PNG images.

This package provides the image endpoints, the fractal calculation and
rendering code, and the management endpoints (health, info, metrics).
"""

__version__ = "0.0.2.dev0"
