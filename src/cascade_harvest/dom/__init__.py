"""
Document access for option harvesting.

Main exports:
- Document / MutationSubscription: the protocol the core primitives depend on
- PlaywrightDocument: adapter over an async Playwright page
"""
from __future__ import annotations

from .playwright_document import PlaywrightDocument, PlaywrightSubscription
from .protocol import Document, MutationListener, MutationSubscription

__all__ = [
    "Document",
    "MutationListener",
    "MutationSubscription",
    "PlaywrightDocument",
    "PlaywrightSubscription",
]
