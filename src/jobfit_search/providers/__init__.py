"""Job board adapters."""

from jobfit_search.providers.base import BaseProviderAdapter
from jobfit_search.providers.factories import build_adapters, create_adapter
from jobfit_search.providers.jsearch import JSearchAdapter, JSearchFeed
from jobfit_search.providers.remoteok import RemoteOKAdapter
from jobfit_search.providers.usajobs import USAJobsAdapter

__all__ = [
    "BaseProviderAdapter",
    "JSearchAdapter",
    "JSearchFeed",
    "RemoteOKAdapter",
    "USAJobsAdapter",
    "build_adapters",
    "create_adapter",
]
