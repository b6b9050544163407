"""Configuration package."""

from jobfit_core.config.settings import Settings

__all__ = ["Settings"]
