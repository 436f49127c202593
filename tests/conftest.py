"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and shared sample
inputs. Isolation fixtures are autouse.
"""

from __future__ import annotations

import logging
import os

import pytest

from quizcost import DetailedStrategy, DocumentChunk, LinearStrategy, QuestionType

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests."""
    monkeypatch.setattr("quizcost.config.load_dotenv", lambda *_args, **_kwargs: False)


@pytest.fixture(autouse=True)
def isolate_quizcost_env(monkeypatch):
    """Clear QUIZCOST_* env vars so the developer's shell cannot leak in."""
    for key in list(os.environ.keys()):
        if key.startswith("QUIZCOST_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def debug_logging():
    """Exercise debug log formatting on every estimate."""
    logging.getLogger("quizcost").setLevel(logging.DEBUG)


# =============================================================================
# Sample Inputs
# =============================================================================


@pytest.fixture
def detailed() -> DetailedStrategy:
    return DetailedStrategy()


@pytest.fixture
def linear() -> LinearStrategy:
    return LinearStrategy()


@pytest.fixture
def two_chunks() -> list[DocumentChunk]:
    """A 400-character chunk with content and an 800-character one without."""
    return [
        DocumentChunk(content="b" * 400, character_count=400, chunk_index=0),
        DocumentChunk(content=None, character_count=800, chunk_index=1),
    ]


@pytest.fixture
def single_type() -> dict[QuestionType, int]:
    return {QuestionType.MCQ_SINGLE: 5}
