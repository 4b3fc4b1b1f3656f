"""Token estimation and budget-bounded history selection.

Purpose of this abstraction:
    Decide which part of an unbounded chat history is forwarded to the model.
    Selection keeps the most recent contiguous suffix of the conversation whose
    estimated token cost fits the configured budget.

Token estimation:
    Tokens are approximated by counting whitespace-delimited words. The estimate
    is cheap, deterministic, and monotonic (appending text never lowers the
    count). It is not a model-exact tokenizer.

Selection policy:
    - Walk from newest to oldest, accumulating estimates.
    - Stop at the first message that would push the total over the budget; no
      older message is considered after that, so the result never has gaps.
    - Messages are all-or-nothing; content is never truncated to fit.
    - Output is returned oldest-first.

Side effects:
    None. Both functions are pure.
"""

import logging

from answer_assistant.llm.provider_config import DEFAULT_MAX_TOKEN_COUNT


logger = logging.getLogger(__name__)


def estimate_tokens(text):
    """Estimate token usage for a message body.

    Input:
        text: Arbitrary message content.

    Output:
        Number of words separated by runs of spaces, tabs or newlines.
        `0` for empty or whitespace-only input.
    """
    if not text:
        return 0
    return len(str(text).split())


def select_history(messages, max_tokens=DEFAULT_MAX_TOKEN_COUNT):
    """Return the newest contiguous suffix of `messages` that fits `max_tokens`.

    Input:
        messages: Ordered chat history, oldest first.
        max_tokens: Token ceiling for the summed estimates of selected content.
            Negative values are treated as `0`.

    Output:
        List of messages in chronological order.

    Edge cases:
        - Empty history returns `[]`.
        - A budget of `0` returns `[]`.
        - If the newest message alone exceeds the budget, returns `[]`.
        - Empty-content messages cost nothing and are kept; they are dropped
          later when the wire payload is built.
    """
    history = list(messages)
    budget = max(0, int(max_tokens))
    if budget == 0:
        return []

    selected = []
    total = 0

    for message in reversed(history):
        cost = estimate_tokens(message.content)
        if total + cost > budget:
            break
        total += cost
        selected.append(message)

    selected.reverse()

    logger.debug(
        "Selected %d of %d messages (est_tokens=%d, budget=%d)",
        len(selected),
        len(history),
        total,
        budget,
    )
    return selected
