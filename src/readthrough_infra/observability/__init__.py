"""Observability: structured logging."""

from readthrough_infra.observability.logging import configure_logging

__all__ = [
    "configure_logging",
]
