"""Async httpx client for the back-office inference engine API.

The engine evaluates an applicant record against its rule base and returns the
detected facts, failures and risk profile that feed the local recommender.
"""

from __future__ import annotations

import logging
import secrets
import string
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from credit_advisor.config import settings
from credit_advisor.exceptions import (
    InferenceEngineError,
    InferenceEngineHTTPError,
    InferenceEngineResponseError,
    InferenceEngineTimeoutError,
)
from credit_advisor.schemas.application import AppInputData
from credit_advisor.schemas.inference import (
    EngineStats,
    EvaluationRequest,
    EvaluationResult,
    EvaluationSession,
    EvaluationsPage,
)

logger = logging.getLogger(__name__)

_SESSION_ALPHABET = string.digits + string.ascii_uppercase
_SESSION_SUFFIX_LENGTH = 6

_SESSION_LIST = TypeAdapter(list[EvaluationSession])


def generate_session_id(now: datetime | None = None) -> str:
    """Client-side evaluation id: eval_YYYYMMDD_HHMMSS_XXXXXX (UTC)."""
    now = now or datetime.now(UTC)
    suffix = "".join(secrets.choice(_SESSION_ALPHABET) for _ in range(_SESSION_SUFFIX_LENGTH))
    return f"eval_{now:%Y%m%d_%H%M%S}_{suffix}"


def _unwrap(body: Any) -> Any:
    """Strip the back-office {message, data, status} envelope when present."""
    if isinstance(body, dict) and isinstance(body.get("data"), (dict, list)):
        return body["data"]
    return body


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


class InferenceEngineClient:
    """Thin async wrapper around the /inference-engine endpoints.

    Auth: optional Bearer token. Every transport failure is raised as an
    ``InferenceEngineError`` subclass; no call fails open.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
    ) -> None:
        engine = settings.engine
        self._base_url = (base_url or engine.inference_engine_base_url).rstrip("/")
        self._token = engine.inference_engine_token if token is None else token
        self._timeout = httpx.Timeout(
            timeout or engine.inference_engine_timeout,
            connect=engine.inference_engine_connect_timeout,
        )

    @property
    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._base_url}/inference-engine/{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers,
                    json=json,
                    params=params,
                )
                response.raise_for_status()
                body = response.json()

        except httpx.TimeoutException as exc:
            logger.warning("Inference engine timeout on %s %s", method, path)
            raise InferenceEngineTimeoutError(f"Timeout calling {method} {path}") from exc

        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("Inference engine HTTP %s on %s %s", status, method, path)
            raise InferenceEngineHTTPError(_error_message(exc.response), status_code=status) from exc

        except httpx.HTTPError as exc:
            logger.warning("Inference engine unreachable on %s %s: %s", method, path, exc)
            raise InferenceEngineError(f"Error calling {method} {path}: {exc}") from exc

        except ValueError as exc:
            logger.warning("Inference engine returned non-JSON body on %s %s", method, path)
            raise InferenceEngineResponseError("Response body is not valid JSON") from exc

        logger.debug("Inference engine %s %s -> %s", method, path, response.status_code)
        return _unwrap(body)

    @staticmethod
    def _parse(adapter: Any, body: Any, what: str) -> Any:
        try:
            return adapter(body)
        except ValidationError as exc:
            logger.warning("Unexpected %s payload from inference engine: %d errors", what, exc.error_count())
            raise InferenceEngineResponseError(f"Malformed {what} response", raw_body=body) from exc

    # ── Endpoints ────────────────────────────────────────────────────

    async def evaluate(
        self,
        input_data: AppInputData,
        session_id: str | None = None,
        user_id: int | None = None,
    ) -> EvaluationResult:
        """POST /inference-engine/evaluate. Generates a session id when none is given."""
        request = EvaluationRequest(
            input_data=input_data,
            session_id=session_id or generate_session_id(),
            user_id=user_id,
        )
        logger.info("Evaluating session %s", request.session_id)
        body = await self._request("POST", "evaluate", json=request.to_payload())
        result: EvaluationResult = self._parse(EvaluationResult.model_validate, body, "evaluation")
        logger.info(
            "Session %s evaluated: %s (%d facts, %d failures)",
            result.session_id,
            result.final_decision,
            len(result.facts_detected),
            len(result.failures_detected),
        )
        return result

    async def list_evaluations(self, limit: int = 50, offset: int = 0) -> EvaluationsPage:
        """GET /inference-engine/evaluations, paginated."""
        body = await self._request("GET", "evaluations", params={"limit": limit, "offset": offset})
        return self._parse(EvaluationsPage.model_validate, body, "evaluations")

    async def get_history(self, user_id: int) -> list[EvaluationSession]:
        """GET /inference-engine/history/{user_id}."""
        body = await self._request("GET", f"history/{user_id}")
        return self._parse(_SESSION_LIST.validate_python, body, "history")

    async def get_stats(self) -> EngineStats:
        """GET /inference-engine/stats."""
        body = await self._request("GET", "stats")
        return self._parse(EngineStats.model_validate, body, "stats")

    async def get_session(self, session_id: str) -> EvaluationSession:
        """GET /inference-engine/session/{session_id}."""
        body = await self._request("GET", f"session/{session_id}")
        return self._parse(EvaluationSession.model_validate, body, "session")


# Module-level singleton
inference_engine_client = InferenceEngineClient()
