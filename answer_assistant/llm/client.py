"""Transport clients for chat completion requests.

Architectural role:
    Serializes a prepared payload, attaches the credential-specific headers,
    issues one HTTP POST, and returns the raw response body.

Variants:
    - `DirectTransport`: talks to the provider with `Authorization: Bearer`.
    - `ProxyTransport`: talks to a trusted intermediary with `QB-Token`; the
      intermediary injects the real provider secret itself.

Retry behavior:
    No retry loop is implemented. Each call is attempted once. The only timeout
    is the caller-configured `OpenAIRequestSettings.timeout`.

Failure handling model:
    Failures are raised, never returned:
    - unaddressable URL -> `InvalidTargetURLError`
    - connection-level errors from `requests` -> `RequestFailedError`
    - non-200 status -> `HTTPStatusError` with the decoded JSON body, if any
"""

import json
import logging
from typing import Protocol
from urllib.parse import urlparse

import requests

from answer_assistant.core.errors import (
    HTTPStatusError,
    InvalidTargetURLError,
    RequestFailedError,
)
from answer_assistant.llm.provider_config import API_VERSIONS, COMPLETIONS_PATH, OPENAI_BASE_URL


logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Minimal interface required by the orchestration engine."""

    label: str

    def send(self, payload: dict, settings) -> bytes:
        """POST `payload` and return the raw success body."""
        ...


def completions_url(base_url: str, api_version: str) -> str:
    """Join base URL, API version and the completions path.

    Surrounding whitespace and trailing slashes on `base_url` are dropped.

    Raises:
        InvalidTargetURLError: when `api_version` is unknown or the result is
            not an absolute http(s) URL.
    """
    if api_version not in API_VERSIONS:
        raise InvalidTargetURLError(f"{base_url} (unknown API version {api_version!r})")
    url = f"{str(base_url).strip().rstrip('/')}/{api_version}/{COMPLETIONS_PATH}"
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidTargetURLError(url)
    return url


def _decode_diagnostic(body: bytes):
    """Best-effort JSON decoding of an error body."""
    try:
        return json.loads(body)
    except (TypeError, ValueError):
        return None


class _HTTPTransport:
    """Shared POST/status handling for both transport variants."""

    label = "provider"

    def __init__(self, session=None):
        self.session = session if session is not None else requests

    def _url(self, settings) -> str:
        raise NotImplementedError

    def _headers(self, settings) -> dict:
        raise NotImplementedError

    def send(self, payload: dict, settings) -> bytes:
        """Send one completion request.

        Args:
            payload: JSON-serializable body built by `request_builder`.
            settings: `OpenAIRequestSettings` (API version, organization, timeout).

        Returns:
            Raw response body bytes of a 200 response.
        """
        url = self._url(settings)
        headers = {"Content-Type": "application/json"}
        headers.update(self._headers(settings))

        logger.debug("POST %s via %s transport", url, self.label)

        try:
            response = self.session.post(
                url,
                headers=headers,
                data=json.dumps(payload).encode("utf-8"),
                timeout=settings.timeout,
            )
        except (requests.exceptions.InvalidURL,
                requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema) as err:
            raise InvalidTargetURLError(url) from err
        except requests.exceptions.RequestException as err:
            raise RequestFailedError(
                f"{self.label.upper()} REQUEST FAILED: {err.__class__.__name__}"
            ) from err

        if response.status_code != 200:
            diagnostic = _decode_diagnostic(response.content)
            logger.warning(
                "%s transport received HTTP %s", self.label, response.status_code
            )
            raise HTTPStatusError(response.status_code, diagnostic)

        return response.content


class DirectTransport(_HTTPTransport):
    """Direct requests to the provider using the API secret."""

    label = "direct"

    def __init__(self, secret: str, session=None):
        super().__init__(session=session)
        self.secret = secret

    def _url(self, settings) -> str:
        return completions_url(OPENAI_BASE_URL, settings.api_version)

    def _headers(self, settings) -> dict:
        headers = {"Authorization": f"Bearer {self.secret}"}
        if settings.organization:
            headers["OpenAI-Organization"] = settings.organization
        return headers


class ProxyTransport(_HTTPTransport):
    """Requests relayed through an intermediary that holds the provider secret."""

    label = "proxy"

    def __init__(self, token: str, endpoint: str, session=None):
        super().__init__(session=session)
        self.token = token
        self.endpoint = endpoint

    def _url(self, settings) -> str:
        return completions_url(self.endpoint, settings.api_version)

    def _headers(self, settings) -> dict:
        return {"QB-Token": self.token}
