import json

import pytest

from answer_assistant.core.message_types import opponent_message, owner_message


class FakeResponse:
    """Minimal stand-in for `requests.Response`."""

    def __init__(self, status_code=200, body=None, content=None):
        self.status_code = status_code
        if content is None:
            content = json.dumps(body if body is not None else {}).encode("utf-8")
        self.content = content


class FakeSession:
    """Records POST calls and replays a canned response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(body=answer_body("Sure thing"))
        self.error = error
        self.calls = []

    def post(self, url, headers=None, data=None, timeout=None):
        self.calls.append({
            "url": url,
            "headers": dict(headers or {}),
            "json": json.loads(data) if data is not None else None,
            "timeout": timeout,
        })
        if self.error is not None:
            raise self.error
        return self.response


def answer_body(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def laptop_history():
    return [
        owner_message("Hello! How can I assist you today?"),
        opponent_message("Hi, I'm looking for a new laptop. Can you recommend one?"),
        owner_message("Of course! What are your requirements and budget for the laptop?"),
        opponent_message("I need a laptop for gaming and programming. My budget is around $1500."),
        owner_message(
            "Great! I recommend the XYZ laptop. It has a powerful GPU for gaming and a fast "
            "CPU for programming. It's priced at $1499. Would you like more details?"
        ),
    ]


@pytest.fixture
def make_session():
    """Factory for sessions answering with `body` (JSON) or raw `content` bytes."""

    def _make(status_code=200, body=None, content=None, error=None):
        if body is None and content is None:
            body = answer_body("Sure thing")
        return FakeSession(FakeResponse(status_code, body=body, content=content), error=error)

    return _make
