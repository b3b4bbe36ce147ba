"""API routers: fractal images, backtrace images and management endpoints."""

from api.src.routers import backtrace, fractal_music, management

__all__ = ["backtrace", "fractal_music", "management"]
