"""Core provider abstractions."""
from tartan_market.providers.core.error_mapper import (PROVIDER_EXCEPTIONS,
                                                      ProviderErrorMapper)
from tartan_market.providers.core.provider_abc import ProviderABC

__all__ = [
    "PROVIDER_EXCEPTIONS",
    "ProviderABC",
    "ProviderErrorMapper",
]
