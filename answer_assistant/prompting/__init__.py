"""Prompting package.

This package contains the deterministic chat completion payload builder used by
the core orchestration layer. It does not perform validation, token-budget
enforcement, or model invocation.
"""
