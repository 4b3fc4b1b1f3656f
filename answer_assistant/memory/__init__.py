"""Conversation history package.

Architectural role:
    - `tokenizer`: word-based token estimation and budget-bounded selection of
      the most recent history suffix.

All functions here are pure; no history is stored between calls.
"""
