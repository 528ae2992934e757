"""
Exception hierarchy for Katha-Yantra.

Every failure a stage can surface to the UI derives from KathaError, so the
Streamlit sections only need to catch one type to show a generic message.
"""

from typing import Any, Dict, Optional


class KathaError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingCredentialError(KathaError):
    """Raised when no provider API key is configured."""

    def __init__(self, variables=("GEMINI_API_KEY", "GOOGLE_API_KEY")):
        super().__init__(
            message=f"No API key found. Set {' or '.join(variables)} in the environment or .env file.",
            details={"variables": list(variables)},
        )


class StageError(KathaError):
    """A pipeline stage failed; the stage produced no output."""

    def __init__(self, stage: str, message: str, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details["stage"] = stage
        super().__init__(message, details)
        self.stage = stage


class SchemaMismatchError(StageError):
    """The provider answered, but not with the declared JSON shape."""


class ProviderError(StageError):
    """The provider call itself failed (transport, quota, safety block...)."""


class StageOrderError(KathaError):
    """A stage output was applied before the stage it depends on."""
