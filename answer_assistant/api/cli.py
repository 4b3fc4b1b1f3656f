"""
Command-line adapter for the answer assistant.

Architectural role:
- Reads a chat history from a JSON file (or stdin) and prints one answer.
- Resolves credentials and generation settings from flags, environment and
  `.env` values.
- Delegates all generation work to `answer_assistant.core.engine.answer`.

History file format:
    [{"role": "opponent", "content": "Hello"},
     {"role": "owner", "content": "Hi, how can I help?"}]

Credential resolution:
- `--secret` selects direct provider access.
- `--token` together with `--proxy` selects intermediary access.
- With neither, the secret is looked up via `load_key("config/openai.key")`
  (`OPENAI_API_KEY` first, then the key file).

Exit codes:
- 0: answer printed to stdout.
- 1: pipeline failure; `error [<code>]: <message>` on stderr.
- 2: unreadable or malformed history input.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import dataclasses
import json
import logging
import sys

from answer_assistant.core.engine import answer
from answer_assistant.core.errors import AnswerAssistantError
from answer_assistant.core.message_types import (
    ProxyCredential,
    SecretCredential,
    messages_from_dicts,
)
from answer_assistant.llm.provider_config import load_key, settings_from_env


logger = logging.getLogger(__name__)

DEFAULT_KEY_FILE = "config/openai.key"


def build_parser():
    """Return the argument parser for `answer-assistant`."""
    parser = argparse.ArgumentParser(
        prog="answer-assistant",
        description="Generate a chat reply from a JSON conversation history.",
    )
    parser.add_argument("history", help="Path to a JSON history file, or '-' for stdin")

    auth = parser.add_mutually_exclusive_group()
    auth.add_argument("--secret", help="Provider API secret (direct access)")
    auth.add_argument("--token", help="Platform user token (proxied access)")
    parser.add_argument("--proxy", help="Intermediary base URL, required with --token")

    parser.add_argument("--model")
    parser.add_argument("--temperature", type=float)
    parser.add_argument("--max-tokens", type=int, help="Cap on generated tokens")
    parser.add_argument("--max-token-count", type=int, help="Token budget for history")
    parser.add_argument("--min-message-count", type=int)
    parser.add_argument("--organization")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def load_history(path):
    """Read and convert the history document at `path` (`-` means stdin)."""
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if not isinstance(data, list):
        raise ValueError("History document must be a JSON array")
    return messages_from_dicts(data)


def resolve_settings(args):
    """Apply command-line overrides on top of environment settings."""
    settings = settings_from_env()
    body = settings.openai.body
    request = settings.openai.request

    body = dataclasses.replace(
        body,
        model=args.model or body.model,
        temperature=body.temperature if args.temperature is None else args.temperature,
        max_tokens=body.max_tokens if args.max_tokens is None else args.max_tokens,
    )
    request = dataclasses.replace(
        request,
        organization=args.organization or request.organization,
    )

    return dataclasses.replace(
        settings,
        max_token_count=(
            settings.max_token_count if args.max_token_count is None else args.max_token_count
        ),
        min_message_count=(
            settings.min_message_count
            if args.min_message_count is None
            else args.min_message_count
        ),
        openai=dataclasses.replace(settings.openai, body=body, request=request),
    )


def resolve_credential(args):
    if args.token is not None:
        return ProxyCredential(token=args.token, endpoint=args.proxy or "")
    if args.secret is not None:
        return SecretCredential(secret=args.secret)
    return SecretCredential(secret=load_key(DEFAULT_KEY_FILE) or "")


def main(argv=None):
    """Run one answer generation and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.proxy and args.token is None:
        parser.error("--proxy requires --token")

    try:
        history = load_history(args.history)
    except (OSError, ValueError) as err:
        print(f"error [invalid_history]: {err}", file=sys.stderr)
        return 2

    logger.debug("Loaded %d history messages from %s", len(history), args.history)

    try:
        settings = resolve_settings(args)
        reply = answer(history, resolve_credential(args), settings)
    except AnswerAssistantError as err:
        print(f"error [{err.code}]: {err.message}", file=sys.stderr)
        return 1
    except ValueError as err:
        print(f"error [invalid_settings]: {err}", file=sys.stderr)
        return 1

    print(reply)
    return 0


if __name__ == "__main__":
    sys.exit(main())
