"""Telegram bot adapter."""

from .client import MockTelegramBot, RealTelegramBot, TelegramBot

__all__ = ["TelegramBot", "RealTelegramBot", "MockTelegramBot"]
