"""Core request orchestration: validation, selection, payload, transport, parsing.

Architectural role:
    Provides the single public entry point (`answer`) used by library callers
    and the CLI/HTTP adapters to turn a chat history into a generated reply.

Control-flow model:
    1. Validate the credential (blank secret/token, malformed proxy URL).
    2. Select the newest history suffix that fits the token budget.
    3. Reject the call when fewer usable messages than required were selected.
    4. Build the chat completion payload.
    5. Dispatch through the transport matching the credential variant.
    6. Parse the response envelope and return the answer text.

    The pipeline is strictly linear. There is no retry loop and no partial
    result: the first failure aborts the call and propagates to the caller.

Interaction surface:
    - Selection: `answer_assistant.memory.tokenizer.select_history`.
    - Payload: `answer_assistant.prompting.request_builder.build_payload`.
    - Transport: `credential.transport(...)` from `core.message_types`.
    - Parsing: `answer_assistant.llm.response_parser.parse_answer`.

State:
    None. Settings are read-only values passed per call; concurrent calls share
    nothing mutable.
"""

import logging

from answer_assistant.core.errors import AnswerAssistantError, InsufficientHistoryError
from answer_assistant.llm.provider_config import default_settings
from answer_assistant.llm.response_parser import parse_answer
from answer_assistant.memory.tokenizer import select_history
from answer_assistant.prompting.request_builder import build_payload


logger = logging.getLogger(__name__)


def _usable_count(messages) -> int:
    """Count messages that will actually reach the wire payload."""
    return sum(1 for message in messages if message.content)


def answer(history, credential, settings=None, session=None) -> str:
    """Generate a reply to `history` using the given credential.

    Args:
        history: Ordered `Message` sequence, oldest first.
        credential: `SecretCredential` for direct provider access or
            `ProxyCredential` for intermediary access.
        settings: `AssistantSettings`; `default_settings()` when omitted.
        session: Optional `requests.Session`-like object exposing `post`.

    Returns:
        Generated answer text.

    Raises:
        InvalidCredentialError: blank secret or token. No request is sent.
        InvalidEndpointError: proxy address is not an http(s) URL.
        InsufficientHistoryError: too few usable messages fit the budget.
        TransportError: the request could not be sent or returned non-200.
        ResponseParseError: the response envelope has an unexpected shape.
    """
    if settings is None:
        settings = default_settings()

    try:
        credential.validate()

        selected = select_history(history, settings.max_token_count)
        usable = _usable_count(selected)
        if usable < settings.min_message_count:
            raise InsufficientHistoryError(settings.min_message_count, usable)

        payload = build_payload(selected, settings.openai.body)
        transport = credential.transport(session=session)

        logger.info(
            "Requesting answer via %s transport (model=%s, messages=%d)",
            transport.label,
            settings.openai.body.model,
            len(payload["messages"]),
        )

        raw = transport.send(payload, settings.openai.request)
        return parse_answer(raw)

    except AnswerAssistantError as err:
        logger.warning("Answer generation failed [%s]: %s", err.code, err.message)
        raise
