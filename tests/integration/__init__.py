"""Integration tests.

These spawn real child processes, using the running Python
interpreter in place of cargo. Run only the fast suite with
``pytest tests/unit/``.
"""
from __future__ import annotations
