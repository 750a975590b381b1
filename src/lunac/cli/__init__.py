"""CLI package.

Holds the ``lunac`` Click application. Commands only build an
``Invocation`` and hand it to the dispatcher; all path, profile and
process handling lives in the parent package.
"""
from __future__ import annotations
