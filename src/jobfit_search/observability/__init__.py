"""Logging setup for jobfit."""

from jobfit_search.observability.logging import configure_logging, search_context

__all__ = ["configure_logging", "search_context"]
