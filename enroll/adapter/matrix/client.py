"""Matrix bot client (client-server API)."""

import uuid
from urllib.parse import quote

from enroll.adapter.chat import RecordingChat, send_json
from enroll.adapter.error import ChatDeliveryError
from enroll.config import MatrixSettings
from enroll.domain.service.clients import MatrixClient
from enroll.domain.value import Message


class MatrixBot(MatrixClient):
    """Base class for Matrix clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealMatrixBot(MatrixBot):
    """Matrix client authenticated with an access token."""

    def __init__(self, settings: MatrixSettings) -> None:
        """Initialize Matrix client.

        Args:
            settings: Homeserver URL and access token
        """
        self.settings = settings
        self.api_url = f"{settings.homeserver.rstrip('/')}/_matrix/client/v3"

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.settings.token}"}

    async def create_room(self, user_id: str) -> str:
        response = await send_json(
            "POST",
            f"{self.api_url}/createRoom",
            "matrix",
            json={"invite": [user_id], "is_direct": True, "preset": "trusted_private_chat"},
            headers=self.headers,
        )
        return response.json()["room_id"]

    async def send_message(self, message: Message, destination: str) -> None:
        txn = uuid.uuid4().hex
        await send_json(
            "PUT",
            f"{self.api_url}/rooms/{quote(destination)}/send/m.room.message/{txn}",
            "matrix",
            json={"msgtype": "m.text", "body": message.markdown or message.text},
            headers=self.headers,
        )


class MockMatrixBot(RecordingChat, MatrixBot):
    """Mock Matrix client for testing."""

    def __init__(self):
        super().__init__()
        self.rooms: dict[str, str] = {}
        self.fail_room = False

    async def create_room(self, user_id: str) -> str:
        if self.fail_room:
            raise ChatDeliveryError("Failed to create room (mock)", status_code=403)
        room = f"!room-{len(self.rooms) + 1}:example.org"
        self.rooms[room] = user_id
        return room
