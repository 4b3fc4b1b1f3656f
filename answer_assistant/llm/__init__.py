"""LLM access package.

Architectural role:
    Provides provider configuration, transport adapters, and response parsing
    used by the orchestration layer to invoke chat completion backends.

Module split:
    - `provider_config`: endpoint constants, settings data classes, env loading.
    - `client`: direct and proxied HTTP transports.
    - `response_parser`: answer extraction and envelope classification.
"""
