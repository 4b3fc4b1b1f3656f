"""Provider/runtime configuration for the LLM layer.

Architectural role:
    Centralizes endpoint constants, generation defaults, and credential lookup
    for `answer_assistant.llm.client` and `answer_assistant.core.engine`.

Configuration model:
    Settings are frozen data classes passed explicitly into every call. There is
    no mutable process-wide settings object:
    - `default_settings()` is a pure factory returning documented defaults.
    - `settings_from_env()` layers environment overrides (and `.env` values
      loaded through `python-dotenv`) on top of those defaults.
    Use `dataclasses.replace` to derive per-call variations.

Determinism:
    `default_settings` is deterministic. `settings_from_env` and `load_key` are
    deterministic for a fixed process environment and filesystem.

Failure behavior:
    Unparseable numeric environment values raise `ValueError` naming the
    offending variable. Missing key material is represented as `None`.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


# Direct provider endpoint; intermediaries supply their own base URL.
OPENAI_HOST = "api.openai.com"
OPENAI_BASE_URL = f"https://{OPENAI_HOST}"
COMPLETIONS_PATH = "chat/completions"

API_VERSIONS = ("v1",)

GPT_MODELS = (
    "gpt-3.5-turbo",
    "gpt-3.5-turbo-0613",
    "gpt-3.5-turbo-16k",
    "gpt-3.5-turbo-16k-0613",
    "gpt-4",
    "gpt-4-0613",
    "gpt-4-32k",
    "gpt-4-32k-0613",
)

DEFAULT_API_VERSION = "v1"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.5
DEFAULT_MAX_TOKEN_COUNT = 3500
DEFAULT_MIN_MESSAGE_COUNT = 1

ENV_PREFIX = "ANSWER_ASSISTANT_"


@dataclass(frozen=True)
class OpenAIRequestSettings:
    """Transport-level request options.

    Attributes:
        api_version: Path segment inserted before `chat/completions`.
        organization: Sent as `OpenAI-Organization` on direct requests when set.
        timeout: Seconds passed to `requests`; `None` waits indefinitely.
    """

    api_version: str = DEFAULT_API_VERSION
    organization: str | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class OpenAIBodySettings:
    """Generation parameters copied into the request body."""

    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int | None = None


@dataclass(frozen=True)
class OpenAISettings:
    request: OpenAIRequestSettings = field(default_factory=OpenAIRequestSettings)
    body: OpenAIBodySettings = field(default_factory=OpenAIBodySettings)


@dataclass(frozen=True)
class AssistantSettings:
    """Complete per-call configuration for `engine.answer`.

    Attributes:
        min_message_count: Minimum number of non-empty messages that must fit
            into the token budget.
        max_token_count: Token budget for the selected history.
        openai: Request and body settings for the completion call.
    """

    min_message_count: int = DEFAULT_MIN_MESSAGE_COUNT
    max_token_count: int = DEFAULT_MAX_TOKEN_COUNT
    openai: OpenAISettings = field(default_factory=OpenAISettings)


def default_settings():
    """Return a fresh settings value holding the documented defaults."""
    return AssistantSettings()


def _env_value(environ, name, cast):
    raw = environ.get(name)
    if raw is None or not str(raw).strip():
        return None
    try:
        return cast(str(raw).strip())
    except ValueError as err:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from err


def settings_from_env(environ=None):
    """Build settings from defaults plus environment overrides.

    Recognized variables:
        `ANSWER_ASSISTANT_MODEL`, `ANSWER_ASSISTANT_TEMPERATURE`,
        `ANSWER_ASSISTANT_MAX_TOKENS`, `ANSWER_ASSISTANT_MAX_TOKEN_COUNT`,
        `ANSWER_ASSISTANT_MIN_MESSAGE_COUNT`, `ANSWER_ASSISTANT_API_VERSION`,
        `ANSWER_ASSISTANT_TIMEOUT`, `OPENAI_ORGANIZATION`.

    Args:
        environ: Mapping to read from. When omitted, `.env` is loaded into the
            process environment first and `os.environ` is used.

    Returns:
        `AssistantSettings` instance.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    defaults = default_settings()
    request = defaults.openai.request
    body = defaults.openai.body

    model = _env_value(environ, ENV_PREFIX + "MODEL", str)
    temperature = _env_value(environ, ENV_PREFIX + "TEMPERATURE", float)
    max_tokens = _env_value(environ, ENV_PREFIX + "MAX_TOKENS", int)
    max_token_count = _env_value(environ, ENV_PREFIX + "MAX_TOKEN_COUNT", int)
    min_message_count = _env_value(environ, ENV_PREFIX + "MIN_MESSAGE_COUNT", int)
    api_version = _env_value(environ, ENV_PREFIX + "API_VERSION", str)
    timeout = _env_value(environ, ENV_PREFIX + "TIMEOUT", float)
    organization = _env_value(environ, "OPENAI_ORGANIZATION", str)

    return AssistantSettings(
        min_message_count=(
            defaults.min_message_count if min_message_count is None else min_message_count
        ),
        max_token_count=(
            defaults.max_token_count if max_token_count is None else max_token_count
        ),
        openai=OpenAISettings(
            request=OpenAIRequestSettings(
                api_version=api_version or request.api_version,
                organization=organization or request.organization,
                timeout=request.timeout if timeout is None else timeout,
            ),
            body=OpenAIBodySettings(
                model=model or body.model,
                temperature=body.temperature if temperature is None else temperature,
                max_tokens=body.max_tokens if max_tokens is None else max_tokens,
            ),
        ),
    )


def load_key(path):
    """Load an API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/openai.key` -> `OPENAI_API_KEY`).
        2. Raw file contents at `path`.

    Edge cases:
        - `None` path returns `None`.
        - Missing file returns `None`.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = os.getenv(key_name)
    if env_value:
        return env_value
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip()
