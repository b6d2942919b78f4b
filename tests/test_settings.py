from __future__ import annotations

import pytest
from pydantic import ValidationError

from yogaflow.core.settings import Settings


def test_cors_origins_accept_comma_separated_string() -> None:
    s = Settings(CORS_ORIGINS="http://localhost:3000, https://app.example ,")
    assert s.cors_origins == ["http://localhost:3000", "https://app.example"]


def test_samesite_none_requires_secure_cookie() -> None:
    with pytest.raises(ValidationError):
        Settings(COOKIE_SAMESITE="none", COOKIE_SECURE=False)
    assert Settings(COOKIE_SAMESITE="none", COOKIE_SECURE=True).cookie_secure is True


@pytest.mark.parametrize(
    "field",
    ["JWT_ACCESS_TTL_SECONDS", "MUX_WEBHOOK_TOLERANCE_SECONDS", "MUX_HTTP_TIMEOUT_SECONDS"],
)
def test_non_positive_durations_are_rejected(field: str) -> None:
    with pytest.raises(ValidationError):
        Settings(**{field: 0})


def test_production_flag() -> None:
    assert Settings(APP_ENV="production").is_production is True
    assert Settings().is_production is False
