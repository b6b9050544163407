"""Custom exception hierarchy for jobfit."""

from __future__ import annotations


class JobFitError(Exception):
    """Base exception for all jobfit errors."""


class ProviderError(JobFitError):
    """Raised inside an adapter when a job board call fails."""


class MalformedPayloadError(ProviderError):
    """Raised when a job board returns a payload that cannot be normalized."""


class MissingCredentialError(ProviderError):
    """Raised when an auth-required job board is called without a credential."""
