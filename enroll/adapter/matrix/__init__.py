"""Matrix bot adapter."""

from .client import MatrixBot, MockMatrixBot, RealMatrixBot

__all__ = ["MatrixBot", "RealMatrixBot", "MockMatrixBot"]
