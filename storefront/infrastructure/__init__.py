"""
Infrastructure package for the storefront client.

Centralizes backend connectivity (the async HTTP reader and its retry policy).
Keep this layer focused on I/O, decoupled from fetch strategies and view logic.
"""

from storefront.infrastructure.api_client import ApiClient, ApiRequestError

__all__ = [
    "ApiClient",
    "ApiRequestError",
]
