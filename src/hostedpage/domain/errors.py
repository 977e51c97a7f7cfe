"""Domain-specific exceptions."""

from __future__ import annotations


class TokenExhaustedError(RuntimeError):
    """Raised when bounded token issuance cannot find a free token."""

    def __init__(self, attempts: int):
        super().__init__(f"No unused token found after {attempts} attempts")
        self.attempts = attempts
