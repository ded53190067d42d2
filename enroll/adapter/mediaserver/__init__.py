"""Media server account service adapter."""

from .client import MediaServerClient, MockMediaServerClient, RealMediaServerClient

__all__ = ["MediaServerClient", "RealMediaServerClient", "MockMediaServerClient"]
