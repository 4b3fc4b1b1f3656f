"""Tests for token estimation and budget-bounded history selection."""

import itertools

import pytest

from answer_assistant.core.message_types import opponent_message, owner_message
from answer_assistant.llm.provider_config import DEFAULT_MAX_TOKEN_COUNT
from answer_assistant.memory.tokenizer import estimate_tokens, select_history


def _is_suffix(part, whole):
    return len(part) <= len(whole) and list(whole[len(whole) - len(part):]) == list(part)


def test_estimate_counts_words() -> None:
    assert estimate_tokens("Hello my friend!") == 3


@pytest.mark.parametrize("text", ["", "   ", "\n\t \n", None])
def test_estimate_blank_text_is_zero(text) -> None:
    assert estimate_tokens(text) == 0


def test_estimate_splits_on_whitespace_runs() -> None:
    assert estimate_tokens("  one\ttwo\n\nthree   four ") == 4


def test_estimate_is_monotonic_under_concatenation() -> None:
    parts = ["alpha beta", "gamma", "delta epsilon zeta"]
    running = ""
    previous = 0
    for part in parts:
        running = f"{running} {part}"
        assert estimate_tokens(running) >= previous
        previous = estimate_tokens(running)


def test_default_budget_is_shared_setting(laptop_history) -> None:
    assert DEFAULT_MAX_TOKEN_COUNT == 3500
    assert select_history(laptop_history) == select_history(laptop_history, 3500)


def test_large_budget_keeps_whole_history(laptop_history) -> None:
    assert select_history(laptop_history, 3000) == laptop_history


def test_small_budget_keeps_only_newest(laptop_history) -> None:
    # newest message is 28 words, the one before it 13
    selected = select_history(laptop_history, 30)

    assert selected == laptop_history[-1:]


def test_selection_stops_at_first_message_over_budget() -> None:
    history = [
        opponent_message("a"),
        owner_message("one two three four five six"),
        opponent_message("x y"),
    ]

    # the single-word oldest message would fit, but it is behind the skipped one
    assert select_history(history, 4) == history[-1:]


def test_newest_message_over_budget_selects_nothing() -> None:
    history = [opponent_message("short"), owner_message("this one is far too long")]

    assert select_history(history, 3) == []


def test_empty_history() -> None:
    assert select_history([], 100) == []


def test_zero_budget_selects_nothing(laptop_history) -> None:
    assert select_history(laptop_history + [owner_message("")], 0) == []


def test_negative_budget_is_treated_as_zero(laptop_history) -> None:
    assert select_history(laptop_history, -5) == []


def test_empty_messages_are_kept_in_suffix() -> None:
    history = [opponent_message("hi there"), owner_message(""), opponent_message("hello")]

    assert select_history(history, 10) == history


def test_accepts_any_iterable(laptop_history) -> None:
    assert select_history(iter(laptop_history), 3000) == laptop_history


@pytest.mark.parametrize("budget", [0, 1, 10, 13, 28, 41, 42, 60, 100, 3000])
def test_selection_is_budgeted_suffix(laptop_history, budget) -> None:
    selected = select_history(laptop_history, budget)

    assert _is_suffix(selected, laptop_history)
    assert sum(estimate_tokens(m.content) for m in selected) <= budget


@pytest.mark.parametrize("budget", [0, 5, 28, 41, 3000])
def test_selection_is_idempotent(laptop_history, budget) -> None:
    once = select_history(laptop_history, budget)

    assert select_history(once, budget) == once


def test_larger_budget_never_shrinks_selection(laptop_history) -> None:
    budgets = [0, 1, 13, 28, 40, 41, 55, 70, 3000]
    for small, large in itertools.combinations(budgets, 2):
        assert _is_suffix(
            select_history(laptop_history, small),
            select_history(laptop_history, large),
        )


def test_duplicate_content_is_legal() -> None:
    history = [opponent_message("same"), opponent_message("same")]

    assert select_history(history, 2) == history
