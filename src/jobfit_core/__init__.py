"""Shared domain models, configuration and constants for jobfit."""
