"""Chat completion payload assembly used by core orchestration.

This module is intentionally narrow: it only maps an already selected history
to the wire payload. Validation, token budgeting, and transport happen outside
this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - Exactly one `system` turn, always first.
    - No hidden side effects (no I/O, no global state mutation).

Role mapping:
    - `Role.OWNER`    -> `assistant` (the side the answer is written for)
    - `Role.OPPONENT` -> `user`
"""

from answer_assistant.core.message_types import Role


# =========================================================
# SYSTEM FRAMING (GLOBAL)
# =========================================================
# Prepended once to every payload, ahead of the mapped history.

SYSTEM_MESSAGE = (
    "You are a helpful, pattern-following assistant. "
    "Write some suggestions to answer"
)

WIRE_ROLES = {
    Role.OWNER: "assistant",
    Role.OPPONENT: "user",
}


def build_messages(messages) -> list[dict]:
    """Map chat history to wire-role message dicts.

    Args:
        messages: Selected history, oldest first.

    Returns:
        List starting with the system framing turn followed by one
        `{"role", "content"}` dict per message with non-empty content.
    """
    wire_messages = [{"role": "system", "content": SYSTEM_MESSAGE}]

    for message in messages:
        if not message.content:
            continue
        wire_messages.append({
            "role": WIRE_ROLES[Role(message.role)],
            "content": message.content,
        })

    return wire_messages


def build_payload(messages, body_settings) -> dict:
    """Build the JSON body for a `chat/completions` request.

    Args:
        messages: Selected history, oldest first.
        body_settings: `OpenAIBodySettings` with model, temperature and the
            optional output token cap.

    Returns:
        Payload dict with `model`, `temperature`, optional `max_tokens`, and
        `messages`.

    Edge cases:
        - `max_tokens` is omitted entirely unless it is a positive integer;
          absence means "unbounded".
    """
    payload = {
        "model": body_settings.model,
        "temperature": body_settings.temperature,
    }

    if body_settings.max_tokens and body_settings.max_tokens > 0:
        payload["max_tokens"] = body_settings.max_tokens

    payload["messages"] = build_messages(messages)

    return payload
