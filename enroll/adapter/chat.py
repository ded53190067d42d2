"""Shared pieces of the chat bot adapters."""

import httpx
import logfire

from enroll.adapter.error import ChatDeliveryError
from enroll.domain.value import Message


async def send_json(
    method: str,
    url: str,
    platform: str,
    json: dict | None = None,
    headers: dict[str, str] | None = None,
    params: dict[str, str | int] | None = None,
) -> httpx.Response:
    """Call a chat platform API and fail on any non-2xx response.

    Raises:
        ChatDeliveryError: On transport failure or an error status
    """
    try:
        async with httpx.AsyncClient() as client:
            response = await client.request(
                method, url, json=json, headers=headers, params=params, timeout=30.0
            )
    except httpx.HTTPError as e:
        logfire.error("Chat platform HTTP error", platform=platform, error=str(e))
        raise ChatDeliveryError(f"HTTP error calling {platform}: {e}")

    if not response.is_success:
        logfire.error(
            "Chat platform request failed",
            platform=platform,
            status_code=response.status_code,
            error=response.text,
        )
        raise ChatDeliveryError(
            f"{platform} request failed: {response.status_code}",
            status_code=response.status_code,
        )
    return response


class RecordingChat:
    """Test double behaviour shared by the mock chat clients.

    Sent messages are kept in ``sent``; destinations in ``failing`` raise.
    """

    def __init__(self):
        self.sent: list[tuple[str, Message]] = []
        self.failing: set[str] = set()

    async def send_message(self, message: Message, destination: str) -> None:
        if destination in self.failing:
            raise ChatDeliveryError(f"Failed to send to {destination} (mock)")
        self.sent.append((destination, message))

    def sent_to(self, destination: str) -> list[Message]:
        return [message for to, message in self.sent if to == destination]
