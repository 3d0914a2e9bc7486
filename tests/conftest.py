"""Shared fixtures for the content-preview test suite.

Documents are plain dicts, the same shape a site build hands the
transform: ``{"contents": bytes, **metadata}``.
"""

import logging

import pytest


def make_document(text: str = "This is text in a buffer.", **metadata) -> dict:
    """Build a document record with UTF-8 contents and optional metadata."""
    return {"contents": text.encode("utf-8"), **metadata}


@pytest.fixture
def files():
    """A small document store covering the gate's skip conditions."""
    return {
        "a": make_document("This is text in a buffer.", preview=""),
        "b": make_document("  This is more text in a buffer.  "),
        "c": {"contents": "This is a test string."},
    }


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
