"""Tests for the inference engine HTTP client.

Covers:
- Evaluate: request payload, bearer header, envelope unwrapping
- Listing, history, stats and session endpoints
- Timeout, HTTP status and malformed body errors
- Session id generation
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from credit_advisor.exceptions import (
    InferenceEngineError,
    InferenceEngineHTTPError,
    InferenceEngineResponseError,
    InferenceEngineTimeoutError,
)
from credit_advisor.integrations.inference_engine import InferenceEngineClient, generate_session_id
from credit_advisor.models import FinalDecision
from credit_advisor.schemas.application import AppInputData

BASE_URL = "http://engine.test/api/v1"

EVALUATION = {
    "session_id": "eval_20260216_143000_ABC123",
    "final_decision": "APROBADO",
    "risk_profile": "RIESGO_BAJO",
    "confidence_score": 92.3,
    "explanation": "Cumple todas las reglas",
    "facts_detected": ["FACT_INGRESOS_MIN_4_SMMLV"],
    "failures_detected": [],
    "recommended_products": [
        {
            "name": "Crédito Hipotecario",
            "description": "Vivienda",
            "max_amount": 60000000,
            "max_term_months": 240,
            "interest_rate": 1.2,
            "special_conditions": [],
            "confidence": 90,
        },
    ],
    "rule_executions": [{"rule_code": "R001", "result": "PASS", "execution_time_ms": 0.4}],
    "total_execution_time_ms": 3.2,
    "evaluated_at": "2026-02-16T14:30:00Z",
    "unexpected_server_field": "ignored",
}

SESSION = {
    "id": 7,
    "session_id": "eval_20260216_143000_ABC123",
    "user_id": 3,
    "user": {"id": 3, "username": "asesor", "email": "asesor@example.com"},
    "final_decision": "APROBADO",
    "risk_profile": "RIESGO_BAJO",
    "confidence_score": 92.3,
    "status": "completed",
    "created_at": "2026-02-16T14:30:00Z",
}


# ── Helpers ──────────────────────────────────────────────────────────


def _make_response(payload, status_code: int = 200) -> MagicMock:
    """Build a mock httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = ""
    if status_code >= 400:
        resp.raise_for_status = MagicMock(side_effect=httpx.HTTPStatusError(
            f"HTTP {status_code}", request=MagicMock(), response=resp,
        ))
    else:
        resp.raise_for_status = MagicMock()
    return resp


def _patch_http(mock_client_cls, *, response=None, side_effect=None) -> AsyncMock:
    mock_http = AsyncMock()
    mock_http.request = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=mock_http)
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_http


@pytest.fixture()
def client() -> InferenceEngineClient:
    return InferenceEngineClient(base_url=BASE_URL + "/", token="secret")


@pytest.fixture()
def applicant() -> AppInputData:
    return AppInputData(
        age=35,
        monthly_income=Decimal("4000000"),
        credit_score=750,
        employment_status="employed",
        credit_purpose="vivienda",
        requested_amount=Decimal("100000000"),
        is_pep=False,
    )


# ── Evaluate ─────────────────────────────────────────────────────────


class TestEvaluate:
    @pytest.mark.asyncio()
    async def test_parses_result(self, client, applicant):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, response=_make_response(EVALUATION))
            result = await client.evaluate(applicant, session_id="eval_20260216_143000_ABC123")

        assert result.final_decision == FinalDecision.APROBADO
        assert result.confidence_score == Decimal("92.3")
        assert result.recommended_products[0].max_term_months == 240
        assert result.rule_executions[0].rule_code == "R001"
        assert result.evaluated_at == datetime(2026, 2, 16, 14, 30, tzinfo=UTC)

    @pytest.mark.asyncio()
    async def test_request_shape(self, client, applicant):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patch_http(mock_client_cls, response=_make_response(EVALUATION))
            await client.evaluate(applicant, session_id="eval_x", user_id=3)

        args, kwargs = mock_http.request.call_args
        assert args == ("POST", f"{BASE_URL}/inference-engine/evaluate")
        assert kwargs["headers"]["Authorization"] == "Bearer secret"

        body = kwargs["json"]
        assert body["session_id"] == "eval_x"
        assert body["user_id"] == 3
        assert body["input_data"]["monthly_income"] == 4000000
        assert body["input_data"]["is_pep"] is False
        # Unset optionals are omitted, never sent as null
        assert "debt_to_income_ratio" not in body["input_data"]

    @pytest.mark.asyncio()
    async def test_generates_session_id(self, client, applicant):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patch_http(mock_client_cls, response=_make_response(EVALUATION))
            await client.evaluate(applicant)

        session_id = mock_http.request.call_args.kwargs["json"]["session_id"]
        assert session_id.startswith("eval_")

    @pytest.mark.asyncio()
    async def test_unwraps_envelope(self, client, applicant):
        envelope = {"message": "OK", "data": EVALUATION, "status": 200}
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, response=_make_response(envelope))
            result = await client.evaluate(applicant)

        assert result.session_id == EVALUATION["session_id"]

    @pytest.mark.asyncio()
    async def test_no_token_no_auth_header(self, applicant):
        client = InferenceEngineClient(base_url=BASE_URL, token="")
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patch_http(mock_client_cls, response=_make_response(EVALUATION))
            await client.evaluate(applicant)

        assert "Authorization" not in mock_http.request.call_args.kwargs["headers"]


# ── Read endpoints ───────────────────────────────────────────────────


class TestReadEndpoints:
    @pytest.mark.asyncio()
    async def test_list_evaluations(self, client):
        page = {"evaluations": [SESSION], "total": 1}
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patch_http(mock_client_cls, response=_make_response(page))
            result = await client.list_evaluations(limit=10, offset=20)

        assert result.total == 1
        assert result.evaluations[0].user.username == "asesor"
        assert mock_http.request.call_args.kwargs["params"] == {"limit": 10, "offset": 20}

    @pytest.mark.asyncio()
    async def test_get_history(self, client):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patch_http(mock_client_cls, response=_make_response({"data": [SESSION]}))
            result = await client.get_history(3)

        assert len(result) == 1
        assert result[0].id == 7
        assert mock_http.request.call_args.args[1].endswith("/inference-engine/history/3")

    @pytest.mark.asyncio()
    async def test_get_stats(self, client):
        stats = {"total_evaluations": 10, "completed_evaluations": 9, "success_rate": 0.9}
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, response=_make_response(stats))
            result = await client.get_stats()

        assert result.total_evaluations == 10
        assert result.failed_evaluations == 0

    @pytest.mark.asyncio()
    async def test_get_session(self, client):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, response=_make_response(SESSION))
            result = await client.get_session("eval_20260216_143000_ABC123")

        assert result.status == "completed"


# ── Errors ───────────────────────────────────────────────────────────


class TestErrors:
    @pytest.mark.asyncio()
    async def test_timeout(self, client):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, side_effect=httpx.TimeoutException("timeout"))
            with pytest.raises(InferenceEngineTimeoutError):
                await client.get_stats()

    @pytest.mark.asyncio()
    async def test_http_error_carries_status_and_message(self, client):
        response = _make_response({"message": "Token inválido"}, status_code=401)
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, response=response)
            with pytest.raises(InferenceEngineHTTPError) as exc_info:
                await client.get_stats()

        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "Token inválido"
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio()
    async def test_connection_error(self, client):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, side_effect=httpx.ConnectError("refused"))
            with pytest.raises(InferenceEngineError):
                await client.get_stats()

    @pytest.mark.asyncio()
    async def test_non_json_body(self, client):
        response = _make_response(None)
        response.json.side_effect = ValueError("no json")
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, response=response)
            with pytest.raises(InferenceEngineResponseError):
                await client.get_stats()

    @pytest.mark.asyncio()
    async def test_schema_mismatch(self, client, applicant):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, response=_make_response({"unexpected": True}))
            with pytest.raises(InferenceEngineResponseError) as exc_info:
                await client.evaluate(applicant)

        assert exc_info.value.raw_body == {"unexpected": True}


# ── Session ids ──────────────────────────────────────────────────────


class TestGenerateSessionId:
    def test_format(self):
        now = datetime(2026, 2, 16, 14, 30, 5, tzinfo=UTC)
        session_id = generate_session_id(now)
        assert re.fullmatch(r"eval_20260216_143005_[0-9A-Z]{6}", session_id)

    def test_unique(self):
        assert generate_session_id() != generate_session_id()
