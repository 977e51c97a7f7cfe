"""Use cases for building and validating hosted payment page requests."""

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from ..domain.payment_request import PaymentRequest
from ..domain.provider_time import (
    from_provider_time,
    parse_provider_time,
    to_provider_time,
    utc_now,
)
from ..env import Settings
from .dtos import HostedPageResponseDTO
from .metrics import validations_total
from .token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


class HostedPageService:
    """Creates signed hosted page requests and checks the provider's replies."""

    def __init__(
        self,
        settings: Settings,
        token_issuer: TokenIssuer,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings
        self.token_issuer = token_issuer
        self._clock = clock

    @property
    def response_max_age(self) -> timedelta:
        return timedelta(seconds=self.settings.response_max_age_seconds)

    def sign(self, id: str, timestamp: int, token: str) -> PaymentRequest:
        """Build a request from known fields without issuing a token."""
        return PaymentRequest(
            id=id,
            tenant_id=self.settings.tenant_id,
            token=token,
            timestamp=timestamp,
            security_key=self.settings.security_key,
            base_url=self.settings.base_url,
        )

    def create(
        self,
        id: str,
        timestamp: Optional[int] = None,
        token: Optional[str] = None,
    ) -> PaymentRequest:
        """Primary factory for outbound requests.

        Missing timestamps default to now; missing tokens are issued fresh.
        """
        if timestamp is None:
            timestamp = to_provider_time(self._clock())
        if token is None:
            token = self.token_issuer.generate_token()
        return self.sign(id, timestamp, token)

    def validate(self, response: Mapping[str, Any]) -> bool:
        """Check a provider response for freshness and a matching signature.

        Timestamps in the future are accepted; only stale ones are rejected.
        Malformed payloads fail validation instead of raising.
        """
        try:
            dto = HostedPageResponseDTO.model_validate(response)
        except ValidationError as e:
            logger.warning(
                "Malformed hosted page response: %d error(s)", e.error_count()
            )
            validations_total.labels(result="malformed").inc()
            return False

        millis = parse_provider_time(dto.timestamp)
        if millis is None:
            logger.warning("Unparsable timestamp in response for id=%s", dto.id)
            validations_total.labels(result="malformed").inc()
            return False

        try:
            sent_at = from_provider_time(millis)
        except (OverflowError, OSError, ValueError):
            logger.warning("Out of range timestamp in response for id=%s", dto.id)
            validations_total.labels(result="malformed").inc()
            return False

        if sent_at < self._clock() - self.response_max_age:
            logger.info("Stale hosted page response for id=%s", dto.id)
            validations_total.labels(result="stale").inc()
            return False

        expected = self.sign(dto.id, millis, dto.token).signature()
        if not hmac.compare_digest(
            expected.encode("utf-8"), dto.response_signature.encode("utf-8")
        ):
            logger.warning("Signature mismatch in response for id=%s", dto.id)
            validations_total.labels(result="bad_signature").inc()
            return False

        validations_total.labels(result="valid").inc()
        return True
