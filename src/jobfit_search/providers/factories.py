"""Factory functions for creating provider adapters from settings."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from jobfit_core.constants import PROVIDER_CONFIGS
from jobfit_core.models.provider import ProviderConfig
from jobfit_search.providers.base import BaseProviderAdapter
from jobfit_search.providers.jsearch import JSearchAdapter, JSearchFeed
from jobfit_search.providers.remoteok import RemoteOKAdapter
from jobfit_search.providers.usajobs import USAJobsAdapter

if TYPE_CHECKING:
    from jobfit_core.config.settings import Settings

ADAPTER_CLASSES: dict[str, type[BaseProviderAdapter]] = {
    "remoteok": RemoteOKAdapter,
    "usajobs": USAJobsAdapter,
    "linkedin": JSearchAdapter,
    "indeed": JSearchAdapter,
    "glassdoor": JSearchAdapter,
}


def create_adapter(
    config: ProviderConfig,
    settings: Settings,
    jsearch_feed: JSearchFeed | None = None,
) -> BaseProviderAdapter:
    """Create the adapter for one registry entry.

    Raises ``KeyError`` for a provider name with no adapter class.
    """
    adapter_cls = ADAPTER_CLASSES[config.name]
    api_key = settings.credential_for(config)
    if issubclass(adapter_cls, JSearchAdapter):
        return adapter_cls(config, settings, api_key=api_key, feed=jsearch_feed)
    return adapter_cls(config, settings, api_key=api_key)


def build_adapters(
    settings: Settings,
    configs: Iterable[ProviderConfig] = PROVIDER_CONFIGS,
) -> list[BaseProviderAdapter]:
    """Create one adapter per registry entry, in registry order.

    The JSearch-backed boards share one feed so a search costs one call.
    """
    feed = JSearchFeed()
    return [create_adapter(config, settings, jsearch_feed=feed) for config in configs]
