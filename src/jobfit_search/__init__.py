"""Multi-provider job search with circuit breakers and relevance ranking."""
