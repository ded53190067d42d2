"""Discord bot adapter."""

from .client import DiscordBot, MockDiscordBot, RealDiscordBot

__all__ = ["DiscordBot", "RealDiscordBot", "MockDiscordBot"]
