from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, field_validator

DEFAULT_BASE_URL = "https://www.zuora.com/apps/PublicHostedPage.do"


class Settings(BaseModel):
    """Typed hosted page settings built from environment variables."""

    security_key: str
    tenant_id: str
    base_url: str = DEFAULT_BASE_URL

    # Token store settings
    database_url: Optional[str] = None
    replay_window_seconds: int = 172800

    # Response validation settings
    response_max_age_seconds: int = 300

    @field_validator("security_key", "tenant_id")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Value cannot be empty")
        return v

    @field_validator("replay_window_seconds", "response_max_age_seconds")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Window must be a positive number of seconds")
        return v


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    replay_window_str = os.environ.get("HOSTED_PAGE_REPLAY_WINDOW_SECONDS")
    max_age_str = os.environ.get("HOSTED_PAGE_RESPONSE_MAX_AGE_SECONDS")

    return Settings(
        security_key=os.environ.get("HOSTED_PAGE_SECURITY_KEY", ""),
        tenant_id=os.environ.get("HOSTED_PAGE_TENANT_ID", ""),
        base_url=os.environ.get("HOSTED_PAGE_BASE_URL", DEFAULT_BASE_URL),
        database_url=os.environ.get("HOSTED_PAGE_DATABASE_URL") or None,
        replay_window_seconds=int(replay_window_str)
        if replay_window_str is not None
        else 172800,
        response_max_age_seconds=int(max_age_str) if max_age_str is not None else 300,
    )
