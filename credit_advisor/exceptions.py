"""Errors raised at the inference-engine transport boundary.

The recommendation core never raises on data; only the HTTP client does.
"""

from __future__ import annotations


class InferenceEngineError(Exception):
    """Base error for failed calls to the remote inference engine."""


class InferenceEngineTimeoutError(InferenceEngineError):
    """The engine did not answer within the configured timeout."""


class InferenceEngineHTTPError(InferenceEngineError):
    """The engine answered with a 4xx/5xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class InferenceEngineResponseError(InferenceEngineError):
    """The engine answered 2xx but the body does not match the expected schema."""

    def __init__(self, message: str, raw_body: object = None) -> None:
        super().__init__(message)
        self.raw_body = raw_body
