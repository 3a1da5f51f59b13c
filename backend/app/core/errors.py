# backend/app/core/errors.py

from typing import Optional


class KogoError(Exception):
    """Base class for errors raised by the planner backend."""


class ConfigurationError(KogoError):
    """A required provider credential is missing. Never retried."""


class UpstreamError(KogoError):
    """A provider call failed: non-success HTTP status, or no response at all."""

    def __init__(self, provider: str, status: Optional[int], body: str):
        self.provider = provider
        self.status = status    # None when no response came back
        self.body = body
        if status is None:
            super().__init__(f"{provider} request failed: {body}")
        else:
            super().__init__(f"{provider} API error {status}: {body}")
