"""Companion request service adapter."""

from .client import CompanionServiceClient, MockCompanionClient, RealCompanionClient

__all__ = ["CompanionServiceClient", "RealCompanionClient", "MockCompanionClient"]
