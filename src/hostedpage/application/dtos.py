"""Data Transfer Objects for hosted page responses."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class HostedPageResponseDTO(BaseModel):
    """Callback payload posted back by the hosted payment page.

    ``timestamp`` is kept raw; it is parsed separately so that a bad value
    is a validation failure rather than a model error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictStr
    tenant_id: Optional[StrictStr] = Field(default=None, alias="tenantId")
    timestamp: Any
    token: StrictStr
    response_signature: StrictStr = Field(..., alias="responseSignature")
