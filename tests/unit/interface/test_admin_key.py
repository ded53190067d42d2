"""Unit tests for the admin key check."""

import pytest
from fastapi import HTTPException

from enroll.config import Settings
from enroll.interface.error import AdminAuthError, check_admin_key, require_admin


@pytest.fixture
def settings() -> Settings:
    settings = Settings()
    settings.admin.api_key = "s3cret"
    return settings


class TestCheckAdminKey:
    def test_accepts_matching_key(self, settings):
        check_admin_key(settings, "s3cret")

    def test_missing_key(self, settings):
        with pytest.raises(AdminAuthError, match="Missing"):
            check_admin_key(settings, None)

    def test_wrong_key(self, settings):
        with pytest.raises(AdminAuthError, match="Invalid"):
            check_admin_key(settings, "guess")

    def test_require_admin_maps_to_401(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            require_admin(settings, "guess")

        assert exc_info.value.status_code == 401
