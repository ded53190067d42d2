"""Companion request service client."""

import uuid
from typing import Any

import httpx
import logfire

from enroll.adapter.error import CompanionError
from enroll.config import CompanionSettings
from enroll.domain.service.clients import CompanionClient

# Fields of an existing user that make up a reusable template
TEMPLATE_FIELDS = (
    "claims",
    "movieRequestLimit",
    "episodeRequestLimit",
    "musicRequestLimit",
    "streamingCountry",
    "language",
    "userQualityProfiles",
)

# Notification agent ids used by the companion service
DISCORD_AGENT = 0
TELEGRAM_AGENT = 4


class CompanionServiceClient(CompanionClient):
    """Base class for companion service clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealCompanionClient(CompanionServiceClient):
    """HTTP client for the companion service's identity API."""

    def __init__(self, settings: CompanionSettings) -> None:
        """Initialize companion client.

        Args:
            settings: Service URL and API key
        """
        self.base_url = settings.url.rstrip("/")
        self.headers = {"ApiKey": settings.api_key}

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        """Send one request and fail on anything but 200/204.

        Raises:
            CompanionError: On transport failure or an error status
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    f"{self.base_url}/api/v1{path}",
                    json=json,
                    headers=self.headers,
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Companion service HTTP error", path=path, error=str(e))
            raise CompanionError(f"HTTP error calling companion service: {e}")

        if response.status_code not in (200, 204):
            logfire.error(
                "Companion service request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=response.text,
            )
            raise CompanionError(
                f"{method} {path} failed: {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def list_users(self) -> list[dict[str, Any]]:
        response = await self._request("GET", "/Identity/Users")
        return response.json()

    async def get_user(self, user_id: str) -> dict[str, Any]:
        response = await self._request("GET", f"/Identity/User/{user_id}")
        return response.json()

    async def modify_user(self, user: dict[str, Any]) -> None:
        await self._request("PUT", "/Identity", json=user)

    async def delete_user(self, user_id: str) -> None:
        await self._request("DELETE", f"/Identity/{user_id}")

    async def template_by_id(self, user_id: str) -> dict[str, Any]:
        user = await self.get_user(user_id)
        return {key: user[key] for key in TEMPLATE_FIELDS if key in user}

    async def create_user(
        self, username: str, password: str, email: str, template: dict[str, Any]
    ) -> None:
        """Create a user from a template.

        The service answers 200 even when it rejects the user, listing the
        reasons in ``errors``.

        Raises:
            CompanionError: If the user was not created
        """
        user = {
            **template,
            "userName": username,
            "password": password,
            "emailAddress": email,
            "userType": 1,
        }
        response = await self._request("POST", "/Identity", json=user)
        body = response.json() if response.content else {}
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            raise CompanionError(f"Companion user not created: {'; '.join(errors)}")

    async def set_notification_prefs(
        self, user: dict[str, Any], discord_id: str = "", telegram_username: str = ""
    ) -> None:
        prefs = []
        if discord_id:
            prefs.append(
                {"userId": user["id"], "agent": DISCORD_AGENT, "value": discord_id, "enabled": True}
            )
        if telegram_username:
            prefs.append(
                {
                    "userId": user["id"],
                    "agent": TELEGRAM_AGENT,
                    "value": telegram_username,
                    "enabled": True,
                }
            )
        await self._request("POST", "/Identity/NotificationPreferences", json=prefs)


class MockCompanionClient(CompanionServiceClient):
    """In-memory companion service for testing.

    Add a method name to ``fail_on`` to make that call raise.
    """

    def __init__(self):
        self.users: dict[str, dict[str, Any]] = {}
        self.notification_prefs: dict[str, dict[str, str]] = {}
        self.fail_on: set[str] = set()

    def _check(self, method: str) -> None:
        if method in self.fail_on:
            raise CompanionError(f"{method} failed (mock)", status_code=500)

    async def list_users(self) -> list[dict[str, Any]]:
        self._check("list_users")
        return list(self.users.values())

    async def get_user(self, user_id: str) -> dict[str, Any]:
        self._check("get_user")
        if user_id not in self.users:
            raise CompanionError(f"User {user_id} not found", status_code=404)
        return self.users[user_id]

    async def modify_user(self, user: dict[str, Any]) -> None:
        self._check("modify_user")
        self.users[user["id"]] = user

    async def delete_user(self, user_id: str) -> None:
        self._check("delete_user")
        self.users.pop(user_id, None)

    async def template_by_id(self, user_id: str) -> dict[str, Any]:
        self._check("template_by_id")
        user = await self.get_user(user_id)
        return {key: user[key] for key in TEMPLATE_FIELDS if key in user}

    async def create_user(
        self, username: str, password: str, email: str, template: dict[str, Any]
    ) -> None:
        self._check("create_user")
        user_id = uuid.uuid4().hex
        self.users[user_id] = {
            **template,
            "id": user_id,
            "userName": username,
            "emailAddress": email,
        }

    async def set_notification_prefs(
        self, user: dict[str, Any], discord_id: str = "", telegram_username: str = ""
    ) -> None:
        self._check("set_notification_prefs")
        self.notification_prefs[user["id"]] = {
            "discord": discord_id,
            "telegram": telegram_username,
        }
