"""Business logic services.

This package contains the fractal image service and the renderer that
turns complex point clouds into images.
"""
