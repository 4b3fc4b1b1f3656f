"""Message and credential data contracts for `answer_assistant.core.engine`.

Architectural role:
    Defines the caller-facing chat history schema and the two mutually exclusive
    credential shapes accepted by the orchestration engine.

Control-flow interaction:
    `engine.answer` validates the supplied credential, then asks it for the
    matching transport. The engine never inspects which variant it received;
    each credential knows how to validate itself and which transport to open.

Role vocabulary:
    Only the two conversational sides exist here (`owner`, `opponent`). The
    wire-level `system` role is synthesized by
    `answer_assistant.prompting.request_builder` and never appears here.

Determinism:
    All data classes are frozen and state-free.
"""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

from answer_assistant.core.errors import InvalidCredentialError, InvalidEndpointError
from answer_assistant.llm.client import DirectTransport, ProxyTransport, Transport


class Role(str, Enum):
    """Conversational side that authored a message."""

    OWNER = "owner"
    OPPONENT = "opponent"


@dataclass(frozen=True)
class Message:
    """One turn of the chat history.

    Attributes:
        role: Which side of the conversation wrote the message.
        content: Raw message text. Empty content is legal and is dropped from
            the wire payload.
    """

    role: Role
    content: str


def owner_message(content: str) -> Message:
    """Build a message written by the user the answer is generated for."""
    return Message(role=Role.OWNER, content=content)


def opponent_message(content: str) -> Message:
    """Build a message written by the other side of the chat."""
    return Message(role=Role.OPPONENT, content=content)


def messages_from_dicts(items) -> list[Message]:
    """Convert `[{"role": "owner"|"opponent", "content": "..."}]` to messages.

    Raises:
        ValueError: on a non-dict item, unknown role, or non-string content.
    """
    messages = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"History item {index} is not an object")
        try:
            role = Role(str(item.get("role", "")).lower())
        except ValueError:
            raise ValueError(f"History item {index} has unknown role {item.get('role')!r}")
        content = item.get("content", "")
        if not isinstance(content, str):
            raise ValueError(f"History item {index} content must be a string")
        messages.append(Message(role=role, content=content))
    return messages


def is_blank(value) -> bool:
    """Return True for `None` or strings that are empty after trimming whitespace."""
    return value is None or not str(value).strip()


def is_valid_endpoint(endpoint) -> bool:
    """Check that an intermediary address is a non-blank http(s) URL with a host.

    Surrounding whitespace is ignored; whitespace inside the address is not.
    """
    if is_blank(endpoint):
        return False
    value = str(endpoint).strip()
    if any(ch.isspace() for ch in value):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class SecretCredential:
    """Provider API secret used for direct requests."""

    secret: str

    def __repr__(self) -> str:
        return "SecretCredential(secret='***')"

    def validate(self) -> None:
        if is_blank(self.secret):
            raise InvalidCredentialError()

    def transport(self, session=None) -> Transport:
        return DirectTransport(self.secret, session=session)


@dataclass(frozen=True)
class ProxyCredential:
    """Platform-issued token plus the address of the intermediary holding the secret.

    Attributes:
        token: Platform user token, sent as `QB-Token`.
        endpoint: Base URL of the intermediary (for example `http://localhost:3000`).
    """

    token: str
    endpoint: str

    def __repr__(self) -> str:
        return f"ProxyCredential(token='***', endpoint={self.endpoint!r})"

    def validate(self) -> None:
        if is_blank(self.token):
            raise InvalidCredentialError()
        if not is_valid_endpoint(self.endpoint):
            raise InvalidEndpointError()

    def transport(self, session=None) -> Transport:
        return ProxyTransport(self.token, str(self.endpoint).strip(), session=session)
