"""
HTTP API adapter for the answer assistant.

Architectural role:
- Expose answer generation over HTTP for clients that cannot embed the library.
- Validate request shape with pydantic models.
- Delegate generation to `answer_assistant.core.engine.answer`.
- Translate the error taxonomy into HTTP status codes.

Endpoint responsibilities:
- `GET /v1/models`: list known model identifiers.
- `POST /v1/answers`: build history, credential and settings, then answer.

Error mapping:
- `ValidationError` family -> HTTP 400.
- `TransportError` / `ResponseParseError` families -> HTTP 502.
- Unusable environment settings -> HTTP 500 with code `invalid_settings`.
- Error bodies: `{"error": {"code": ..., "message": ...}}`; upstream status
  failures additionally carry `status_code` and `diagnostic`.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Secrets and tokens from request bodies are never logged.
"""

from dotenv import load_dotenv

load_dotenv()

import dataclasses
import logging
import time
from typing import Literal

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from answer_assistant.core.engine import answer
from answer_assistant.core.errors import (
    AnswerAssistantError,
    HTTPStatusError,
    InvalidCredentialError,
    ValidationError,
)
from answer_assistant.core.message_types import (
    Message,
    ProxyCredential,
    Role,
    SecretCredential,
)
from answer_assistant.llm.provider_config import GPT_MODELS, settings_from_env


logger = logging.getLogger(__name__)

app = FastAPI(title="answer-assistant")


# ============================================================
# Request Schema
# ============================================================

class MessageIn(BaseModel):
    role: Literal["owner", "opponent"]
    content: str = ""


class SettingsIn(BaseModel):
    """Optional per-request overrides of environment settings."""

    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    max_token_count: int | None = Field(default=None, ge=0)
    min_message_count: int | None = Field(default=None, ge=0)
    organization: str | None = None


class AnswerRequest(BaseModel):
    messages: list[MessageIn]
    secret: str | None = None
    token: str | None = None
    proxy_url: str | None = None
    settings: SettingsIn | None = None


# ============================================================
# Helpers
# ============================================================

def _credential(request: AnswerRequest):
    """Pick the credential variant; exactly one shape must be supplied."""
    if request.secret is not None and request.token is None and request.proxy_url is None:
        return SecretCredential(secret=request.secret)
    if request.token is not None and request.secret is None:
        return ProxyCredential(token=request.token, endpoint=request.proxy_url or "")
    raise InvalidCredentialError(
        "Provide either `secret` or `token` with `proxy_url`"
    )


def _settings(overrides: SettingsIn | None):
    settings = settings_from_env()
    if overrides is None:
        return settings

    body = settings.openai.body
    request = settings.openai.request
    body = dataclasses.replace(
        body,
        model=overrides.model or body.model,
        temperature=body.temperature if overrides.temperature is None else overrides.temperature,
        max_tokens=body.max_tokens if overrides.max_tokens is None else overrides.max_tokens,
    )
    request = dataclasses.replace(
        request,
        organization=overrides.organization or request.organization,
    )
    return dataclasses.replace(
        settings,
        max_token_count=(
            settings.max_token_count
            if overrides.max_token_count is None
            else overrides.max_token_count
        ),
        min_message_count=(
            settings.min_message_count
            if overrides.min_message_count is None
            else overrides.min_message_count
        ),
        openai=dataclasses.replace(settings.openai, body=body, request=request),
    )


def _error_response(err: AnswerAssistantError) -> JSONResponse:
    error = {"code": err.code, "message": err.message}
    if isinstance(err, HTTPStatusError):
        error["status_code"] = err.status_code
        error["diagnostic"] = err.diagnostic

    status_code = 400 if isinstance(err, ValidationError) else 502
    return JSONResponse(status_code=status_code, content={"error": error})


# ============================================================
# Model Listing
# ============================================================

@app.get("/v1/models")
def list_models():
    """Return known model identifiers as OpenAI-style model metadata."""
    return {
        "object": "list",
        "data": [
            {
                "id": model,
                "object": "model",
                "created": int(time.time()),
                "owned_by": "openai",
            }
            for model in GPT_MODELS
        ],
    }


# ============================================================
# Answers
# ============================================================

@app.post("/v1/answers")
def create_answer(request: AnswerRequest):
    """Generate one answer for the supplied history.

    Runs in FastAPI's worker threadpool because the engine performs a blocking
    HTTP call.
    """
    history = [
        Message(role=Role(item.role), content=item.content)
        for item in request.messages
    ]

    try:
        settings = _settings(request.settings)
    except ValueError as err:
        logger.error("Invalid answer settings: %s", err)
        return JSONResponse(
            status_code=500,
            content={"error": {"code": "invalid_settings", "message": str(err)}},
        )

    try:
        credential = _credential(request)
        reply = answer(history, credential, settings)
    except AnswerAssistantError as err:
        logger.warning("Answer request failed [%s]", err.code)
        return _error_response(err)

    return {"answer": reply}
