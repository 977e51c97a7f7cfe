"""Hosted payment page request: signing and redirect URL assembly."""

from __future__ import annotations

import base64
import hashlib

from pydantic import BaseModel, ConfigDict, Field

from ..env import DEFAULT_BASE_URL

REQUEST_PAGE_METHOD = "requestPage"

# Field order is part of the signature and must match the provider.
SIGNED_FIELDS = ("id", "tenantId", "timestamp", "token")


class PaymentRequest(BaseModel):
    """Immutable request for the provider's hosted payment page."""

    model_config = ConfigDict(frozen=True)

    id: str
    tenant_id: str
    token: str
    timestamp: int
    security_key: str = Field(exclude=True, repr=False)
    base_url: str = DEFAULT_BASE_URL

    def _signed_values(self) -> dict[str, str]:
        return {
            "id": self.id,
            "tenantId": self.tenant_id,
            "timestamp": str(self.timestamp),
            "token": self.token,
        }

    def signature_input(self) -> str:
        """Signed fields joined as a query string, followed by the raw key."""
        values = self._signed_values()
        query = "&".join(f"{name}={values[name]}" for name in SIGNED_FIELDS)
        return query + self.security_key

    def signature(self) -> str:
        """
        Base64 of the lowercase MD5 hex digest of ``signature_input()``.

        The provider hashes the hex string, not the raw digest bytes, so the
        32 ASCII hex characters are what gets base64-encoded here.
        """
        hex_digest = hashlib.md5(self.signature_input().encode("utf-8")).hexdigest()
        return base64.b64encode(hex_digest.encode("ascii")).decode("ascii")

    def params(self) -> list[tuple[str, str]]:
        """Query parameters in the order the provider expects."""
        values = self._signed_values()
        return [
            ("method", REQUEST_PAGE_METHOD),
            *((name, values[name]) for name in SIGNED_FIELDS),
            ("signature", self.signature()),
        ]

    def request_url(self) -> str:
        """Redirect URL for the hosted page. Values are not URL-encoded."""
        query = "&".join(f"{key}={value}" for key, value in self.params())
        return f"{self.base_url}?{query}"
