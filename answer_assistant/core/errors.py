"""Error taxonomy shared by every layer of the answer pipeline.

Architectural role:
    Every failure the engine can surface derives from `AnswerAssistantError` and
    carries a stable machine-readable `code`. Adapters (CLI, HTTP) present the
    code to users; nothing inside the pipeline retries or recovers.

Families:
    - `ValidationError`: rejected before any network activity.
    - `TransportError`: the request could not be addressed, sent, or was
      answered with a non-success status.
    - `ResponseParseError`: the provider answered, but the envelope does not
      have the expected `choices[0].message.content` shape. Each subclass names
      the first missing piece so contract drift is easy to diagnose.
"""

import json


class AnswerAssistantError(Exception):
    """Base class for all pipeline failures."""

    code = "answer_assistant_error"
    default_message = "Answer generation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =========================================================
# VALIDATION
# =========================================================

class ValidationError(AnswerAssistantError):
    code = "validation_error"


class InvalidCredentialError(ValidationError):
    code = "invalid_credential"
    default_message = "The token has incorrect value"


class InvalidEndpointError(ValidationError):
    code = "invalid_endpoint"
    default_message = "The proxy server URL has incorrect value"


class InsufficientHistoryError(ValidationError):
    """Fewer usable messages fit into the token budget than required."""

    code = "insufficient_history"

    def __init__(self, required: int, selected: int):
        self.required = required
        self.selected = selected
        super().__init__(
            f"At least {required} message(s) required within the token budget, "
            f"got {selected}"
        )


# =========================================================
# TRANSPORT
# =========================================================

class TransportError(AnswerAssistantError):
    code = "transport_error"


class InvalidTargetURLError(TransportError):
    code = "invalid_target_url"
    default_message = "The request URL is invalid"

    def __init__(self, url: str | None = None):
        self.url = url
        super().__init__(f"The request URL is invalid: {url}" if url else None)


class RequestFailedError(TransportError):
    """The HTTP exchange itself failed (connection refused, timeout, ...)."""

    code = "request_failed"
    default_message = "The request could not be completed"


class HTTPStatusError(TransportError):
    """Non-success HTTP status with the decoded body as diagnostic context.

    Attributes:
        status_code: Status returned by the provider or intermediary.
        diagnostic: Decoded JSON body, or `None` when the body was not JSON.
    """

    code = "http_status"

    def __init__(self, status_code: int, diagnostic=None):
        self.status_code = status_code
        self.diagnostic = diagnostic

        reason = "Invalid response"
        if diagnostic is not None:
            reason = f"Invalid response. {json.dumps(diagnostic, ensure_ascii=False)}"
        super().__init__(f"HTTP {status_code}: {reason}")


# =========================================================
# RESPONSE PARSING
# =========================================================

class ResponseParseError(AnswerAssistantError):
    code = "response_parse_error"


class MalformedBodyError(ResponseParseError):
    code = "malformed_body"
    default_message = "Response body is not a JSON object"


class MalformedChoicesError(ResponseParseError):
    code = "malformed_choices"
    default_message = "Response has no `choices` array"


class EmptyChoicesError(ResponseParseError):
    code = "empty_choices"
    default_message = "Response `choices` has no usable first element"


class MalformedMessageError(ResponseParseError):
    code = "malformed_message"
    default_message = "First choice has no `message` object"


class MalformedContentError(ResponseParseError):
    code = "malformed_content"
    default_message = "Choice message has no string `content`"
