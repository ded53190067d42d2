"""Media server account service client.

Talks to the server's user REST API with an API key. Both 200 and 204
responses count as success.
"""

import uuid
from typing import Any

import httpx
import logfire

from enroll.adapter.error import MediaServerError
from enroll.config import MediaServerSettings
from enroll.domain.model.account import Account
from enroll.domain.service.clients import AccountClient
from enroll.domain.value import AccountId

SUCCESS = (200, 204)


class MediaServerClient(AccountClient):
    """Base class for media server clients.

    Provides type distinction for dependency injection.
    """

    pass


def _to_account(data: dict[str, Any]) -> Account:
    return Account(
        id=AccountId(data["Id"]),
        name=data["Name"],
        policy=data.get("Policy") or {},
        configuration=data.get("Configuration") or {},
    )


class RealMediaServerClient(MediaServerClient):
    """HTTP client for the media server's user API."""

    def __init__(self, settings: MediaServerSettings) -> None:
        """Initialize media server client.

        Args:
            settings: Server URL and API key
        """
        self.base_url = settings.url.rstrip("/")
        self.headers = {"X-Emby-Token": settings.api_key}

    async def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and fail on anything but 200/204.

        Raises:
            MediaServerError: On transport failure or an error status
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    json=json,
                    params=params,
                    headers=self.headers,
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Media server HTTP error", method=method, path=path, error=str(e))
            raise MediaServerError(f"HTTP error calling media server: {e}")

        if response.status_code not in SUCCESS:
            logfire.error(
                "Media server request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=response.text,
            )
            raise MediaServerError(
                f"{method} {path} failed: {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def create_account(self, name: str, password: str) -> Account:
        response = await self._request(
            "POST", "/Users/New", json={"Name": name, "Password": password}
        )
        return _to_account(response.json())

    async def get_account(self, account_id: AccountId) -> Account:
        response = await self._request("GET", f"/Users/{account_id}")
        return _to_account(response.json())

    async def get_account_by_name(self, name: str) -> Account | None:
        response = await self._request("GET", "/Users")
        for user in response.json():
            if user.get("Name", "").lower() == name.lower():
                return _to_account(user)
        return None

    async def delete_account(self, account_id: AccountId) -> None:
        await self._request("DELETE", f"/Users/{account_id}")

    async def set_policy(self, account_id: AccountId, policy: dict[str, Any]) -> None:
        await self._request("POST", f"/Users/{account_id}/Policy", json=policy)

    async def set_configuration(
        self, account_id: AccountId, configuration: dict[str, Any]
    ) -> None:
        await self._request(
            "POST", f"/Users/{account_id}/Configuration", json=configuration
        )

    async def set_display_preferences(
        self, account_id: AccountId, preferences: dict[str, Any]
    ) -> None:
        await self._request(
            "POST",
            "/DisplayPreferences/usersettings",
            json=preferences,
            params={"userId": account_id, "client": "emby"},
        )

    async def get_display_preferences(self, account_id: AccountId) -> dict[str, Any]:
        response = await self._request(
            "GET",
            "/DisplayPreferences/usersettings",
            params={"userId": account_id, "client": "emby"},
        )
        return response.json()

    async def reset_password(self, name: str) -> None:
        await self._request(
            "POST", "/Users/ForgotPassword", json={"EnteredUsername": name}
        )

    async def set_password(self, account_id: AccountId, current: str, new: str) -> None:
        await self._request(
            "POST",
            f"/Users/{account_id}/Password",
            json={"CurrentPw": current, "NewPw": new},
        )


class MockMediaServerClient(MediaServerClient):
    """In-memory media server for testing.

    Add a method name to ``fail_on`` to make that call raise.
    """

    def __init__(self):
        self.accounts: dict[AccountId, Account] = {}
        self.display_preferences: dict[AccountId, dict[str, Any]] = {}
        self.passwords: dict[AccountId, str] = {}
        self.password_resets: list[str] = []
        self.fail_on: set[str] = set()

    def _check(self, method: str) -> None:
        if method in self.fail_on:
            raise MediaServerError(f"{method} failed (mock)", status_code=500)

    def _get(self, account_id: AccountId) -> Account:
        account = self.accounts.get(account_id)
        if account is None:
            raise MediaServerError(f"User {account_id} not found", status_code=404)
        return account

    async def create_account(self, name: str, password: str) -> Account:
        self._check("create_account")
        if await self.get_account_by_name(name):
            raise MediaServerError(f"User {name} already exists", status_code=400)
        account = Account(id=AccountId(uuid.uuid4().hex), name=name)
        self.accounts[account.id] = account
        self.passwords[account.id] = password
        return account

    async def get_account(self, account_id: AccountId) -> Account:
        self._check("get_account")
        return self._get(account_id)

    async def get_account_by_name(self, name: str) -> Account | None:
        self._check("get_account_by_name")
        for account in self.accounts.values():
            if account.name.lower() == name.lower():
                return account
        return None

    async def delete_account(self, account_id: AccountId) -> None:
        self._check("delete_account")
        self._get(account_id)
        del self.accounts[account_id]

    async def set_policy(self, account_id: AccountId, policy: dict[str, Any]) -> None:
        self._check("set_policy")
        account = self._get(account_id)
        self.accounts[account_id] = account.model_copy(update={"policy": policy})

    async def set_configuration(
        self, account_id: AccountId, configuration: dict[str, Any]
    ) -> None:
        self._check("set_configuration")
        account = self._get(account_id)
        self.accounts[account_id] = account.model_copy(
            update={"configuration": configuration}
        )

    async def set_display_preferences(
        self, account_id: AccountId, preferences: dict[str, Any]
    ) -> None:
        self._check("set_display_preferences")
        self._get(account_id)
        self.display_preferences[account_id] = preferences

    async def get_display_preferences(self, account_id: AccountId) -> dict[str, Any]:
        self._check("get_display_preferences")
        self._get(account_id)
        return self.display_preferences.get(account_id, {})

    async def reset_password(self, name: str) -> None:
        self._check("reset_password")
        self.password_resets.append(name)

    async def set_password(self, account_id: AccountId, current: str, new: str) -> None:
        self._check("set_password")
        self._get(account_id)
        if self.passwords.get(account_id) != current:
            raise MediaServerError("Wrong password", status_code=400)
        self.passwords[account_id] = new
