"""Answer assistant adapter package.

Architectural role:
- Defines the external interaction boundary for HTTP and CLI interfaces.
- Performs adapter-level input parsing and error presentation.
- Delegates answer generation to `answer_assistant.core.engine.answer`.
"""
