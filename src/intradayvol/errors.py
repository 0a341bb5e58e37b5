"""Analysis error types."""

from __future__ import annotations

from enum import Enum


class AnalysisErrorCode(Enum):
    """Error classification codes."""

    VALIDATION_FAILED = "validation_failed"
    INVALID_CONFIG = "invalid_config"
    INVALID_SERIES = "invalid_series"
    NO_DATA = "no_data"
    PROVIDER_ERROR = "provider_error"
    AUTH_FAILED = "auth_failed"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"


class AnalysisError(Exception):
    """Analysis exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller may retry (provider failures only).
    """

    def __init__(
        self,
        message: str,
        code: AnalysisErrorCode = AnalysisErrorCode.INVALID_SERIES,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable
