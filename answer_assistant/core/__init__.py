"""Core orchestration package.

Architectural role:
    Exposes the answer pipeline that sits between API/CLI entrypoints and the
    lower-level subsystems (history selection, payload building, transport,
    response parsing).

Composition:
    - `engine`: `answer(...)`, the single public entry point.
    - `message_types`: `Message`, `Role` and the two credential variants.
    - `errors`: the error taxonomy raised by every layer.

Determinism and side effects:
    Package import itself is deterministic and side-effect free.
"""
