"""Inference engine API client."""

from credit_advisor.integrations.inference_engine.client import (
    InferenceEngineClient,
    generate_session_id,
    inference_engine_client,
)

__all__ = ["InferenceEngineClient", "generate_session_id", "inference_engine_client"]
