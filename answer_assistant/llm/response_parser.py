"""Answer extraction from chat completion response envelopes.

Architectural role:
    Turns the raw body returned by a transport into the generated text, or
    raises the `ResponseParseError` subclass naming the first missing piece.

Check order:
    body is a JSON object -> `choices` is a list -> `choices[0]` is an object
    -> it has a `message` object -> that message has a string `content`.

Only the first choice is consulted; additional choices are ignored.
"""

import json

from answer_assistant.core.errors import (
    EmptyChoicesError,
    MalformedBodyError,
    MalformedChoicesError,
    MalformedContentError,
    MalformedMessageError,
)


def parse_answer(body) -> str:
    """Extract `choices[0].message.content` from a response body.

    Args:
        body: Raw response bytes (or already decoded text).

    Returns:
        The generated answer text, unmodified.
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as err:
        raise MalformedBodyError() from err

    if not isinstance(data, dict):
        raise MalformedBodyError()

    choices = data.get("choices")
    if not isinstance(choices, list):
        raise MalformedChoicesError()

    first = choices[0] if choices else None
    if not isinstance(first, dict):
        raise EmptyChoicesError()

    message = first.get("message")
    if not isinstance(message, dict):
        raise MalformedMessageError()

    content = message.get("content")
    if not isinstance(content, str):
        raise MalformedContentError()

    return content
