"""Failure isolation for provider calls: circuit breakers and throttling."""

from jobfit_search.resilience.circuit_breaker import CircuitBreaker
from jobfit_search.resilience.throttle import RequestThrottle

__all__ = ["CircuitBreaker", "RequestThrottle"]
