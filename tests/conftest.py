"""Shared pytest fixtures for the mailroom test suite."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
import structlog

from mailroom.config import get_settings
from mailroom.database import open_database
from mailroom.domain.models import Message
from mailroom.inbox.store import MessageStore
from mailroom.templates.store import TemplateStore

# Fixed reference time so snooze expiry is deterministic
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Capture structlog events instead of printing them."""
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Clear get_settings lru_cache around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite connection with both store tables initialized."""
    connection = open_database(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def template_store(conn: sqlite3.Connection) -> TemplateStore:
    """TemplateStore backed by the in-memory connection."""
    return TemplateStore(conn)


@pytest.fixture
def message_store(conn: sqlite3.Connection) -> MessageStore:
    """MessageStore backed by the in-memory connection."""
    return MessageStore(conn)


@pytest.fixture
def make_message() -> Callable[..., Message]:
    """Factory for Message models with sensible defaults.

    Each call gets a fresh id and a ``created_at`` one minute after the last.
    """
    counter = {"n": 0}

    def _make(**overrides: Any) -> Message:
        counter["n"] += 1
        n = counter["n"]
        created = NOW - timedelta(hours=1) + timedelta(minutes=n)
        fields: dict[str, Any] = {
            "id": f"msg-{n}",
            "to": "admin@aruviah.com",
            "from_address": "vendor@example.com",
            "subject": f"Subject {n}",
            "body": f"<p>Body {n}</p>",
            "created_at": created,
            "updated_at": created,
        }
        fields.update(overrides)
        return Message(**fields)

    return _make
