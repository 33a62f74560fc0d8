"""
Ports (hexagonal interfaces) consumed by the service layer.

Concrete adapters live under ``postboard.infra``; services depend only on
the contracts declared here.
"""

from __future__ import annotations

from .token_provider import (
    ConfigurationError,
    StubTokenProvider,
    TokenDecodeError,
    TokenExpiredError,
    TokenProvider,
)

__all__ = [
    "ConfigurationError",
    "StubTokenProvider",
    "TokenDecodeError",
    "TokenExpiredError",
    "TokenProvider",
]
