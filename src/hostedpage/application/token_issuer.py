"""Anti-replay token issuance."""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..domain.errors import TokenExhaustedError
from ..domain.provider_time import utc_now
from ..infrastructure.storage import TokenStore
from .metrics import token_collisions_total, tokens_issued_total

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 32
TOKEN_ALPHABET = string.digits + string.ascii_lowercase
REPLAY_WINDOW = timedelta(hours=48)


def random_token() -> str:
    """32 characters, each drawn uniformly from [0-9a-z]."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


class TokenIssuer:
    """Issues tokens that are not reused within the replay window.

    Expired entries are only noticed when a new candidate collides with
    them; nothing is swept. With ``max_attempts=None`` the issuer retries
    until it succeeds, so a store that reports every token as recent will
    never return.
    """

    def __init__(
        self,
        store: TokenStore,
        replay_window: timedelta = REPLAY_WINDOW,
        max_attempts: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
        token_factory: Callable[[], str] = random_token,
    ):
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.store = store
        self.replay_window = replay_window
        self.max_attempts = max_attempts
        self._clock = clock
        self._token_factory = token_factory

    def is_blocked(self, token: str, now: Optional[datetime] = None) -> bool:
        """True while the token's recorded issuance is inside the window."""
        issued_at = self.store.get(token)
        if issued_at is None:
            return False
        if now is None:
            now = self._clock()
        return issued_at > now - self.replay_window

    def generate_token(self) -> str:
        """Draw candidates until one is free, record it and return it.

        Store errors propagate to the caller.
        """
        attempts = 0
        while True:
            attempts += 1
            candidate = self._token_factory()
            now = self._clock()
            if not self.is_blocked(candidate, now):
                break
            token_collisions_total.inc()
            logger.warning("Token collision on attempt %d, redrawing", attempts)
            if self.max_attempts is not None and attempts >= self.max_attempts:
                logger.error("Giving up token issuance after %d attempts", attempts)
                raise TokenExhaustedError(attempts)

        self.store.set(candidate, now)
        tokens_issued_total.inc()
        logger.debug("Issued token after %d attempt(s)", attempts)
        return candidate
