"""SQLite-backed admin mailbox.

Messages are created on send (as a read, sent copy) or on draft-save, mutated
by star/snooze/read/send actions, and deleted outright.  Section filtering is
done client-side after a full ``list_all()`` fetch; no section predicate is
pushed down to SQL.

Batched mutations are a set of independent per-message updates: a failure on
one id is recorded and the rest still apply.
"""

from __future__ import annotations

import json
import sqlite3
import uuid
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

import structlog

from mailroom.domain.errors import InvalidMessageError, MessageNotFoundError
from mailroom.domain.models import BatchFailure, BatchResult, Message
from mailroom.domain.types import RelatedType, Section, SortOrder
from mailroom.inbox.sections import count_all, get_section

logger = structlog.get_logger()

DEFAULT_FROM_ADDRESS = "noreply@aruviah.com"

_COLUMNS = (
    "id, to_address, from_address, subject, body, is_read, is_starred, is_draft, "
    "is_sent, is_snoozed, snooze_until, related_type, related_data, created_at, updated_at"
)


def init_message_table(conn: sqlite3.Connection) -> None:
    """Create the inbox_message table if it does not already exist.

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS inbox_message (
            id TEXT PRIMARY KEY,
            to_address TEXT NOT NULL,
            from_address TEXT NOT NULL,
            subject TEXT NOT NULL,
            body TEXT NOT NULL,
            is_read INTEGER NOT NULL DEFAULT 0,
            is_starred INTEGER NOT NULL DEFAULT 0,
            is_draft INTEGER NOT NULL DEFAULT 0,
            is_sent INTEGER NOT NULL DEFAULT 0,
            is_snoozed INTEGER NOT NULL DEFAULT 0,
            snooze_until TEXT,
            related_type TEXT NOT NULL DEFAULT 'general',
            related_data TEXT NOT NULL DEFAULT '{}',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """)

    conn.execute("CREATE INDEX IF NOT EXISTS idx_inbox_created_at ON inbox_message (created_at)")

    conn.commit()


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _row_to_message(row: tuple[Any, ...]) -> Message:
    (
        message_id,
        to_address,
        from_address,
        subject,
        body,
        is_read,
        is_starred,
        is_draft,
        is_sent,
        is_snoozed,
        snooze_until,
        related_type,
        related_data,
        created_at,
        updated_at,
    ) = row
    return Message(
        id=message_id,
        to=to_address,
        from_address=from_address,
        subject=subject,
        body=body,
        is_read=bool(is_read),
        is_starred=bool(is_starred),
        is_draft=bool(is_draft),
        is_sent=bool(is_sent),
        is_snoozed=bool(is_snoozed),
        snooze_until=datetime.fromisoformat(snooze_until) if snooze_until else None,
        related_type=RelatedType(related_type),
        related_data=json.loads(related_data),
        created_at=datetime.fromisoformat(created_at),
        updated_at=datetime.fromisoformat(updated_at),
    )


class MessageStore:
    """Persist and query admin mailbox messages in SQLite.

    Args:
        conn: An open database connection whose database already has the
              ``inbox_message`` table (see ``init_message_table``).
        default_from_address: ``From`` address used when a caller gives none.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        default_from_address: str = DEFAULT_FROM_ADDRESS,
    ) -> None:
        self._conn = conn
        self._default_from_address = default_from_address

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def _insert(self, message: Message) -> Message:
        self._conn.execute(
            f"INSERT INTO inbox_message ({_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                message.id,
                message.to,
                message.from_address,
                message.subject,
                message.body,
                int(message.is_read),
                int(message.is_starred),
                int(message.is_draft),
                int(message.is_sent),
                int(message.is_snoozed),
                message.snooze_until.isoformat() if message.snooze_until else None,
                message.related_type.value,
                json.dumps(message.related_data),
                message.created_at.isoformat(),
                message.updated_at.isoformat(),
            ),
        )
        self._conn.commit()
        return message

    def save_message(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        from_address: str | None = None,
        related_type: RelatedType | str = RelatedType.GENERAL,
        related_data: dict[str, Any] | None = None,
        is_sent: bool = False,
    ) -> Message:
        """Store a received message or the sent copy of an outgoing one.

        Sent copies are stored as already read.

        Raises:
            InvalidMessageError: If ``to``, ``subject`` or ``body`` is blank.
        """
        required = {"to": to, "subject": subject, "body": body}
        missing = [name for name, value in required.items() if not value.strip()]
        if missing:
            raise InvalidMessageError(f"Missing required email fields: {', '.join(missing)}")

        now = _now()
        message = Message(
            id=uuid.uuid4().hex,
            to=to,
            from_address=from_address or self._default_from_address,
            subject=subject,
            body=body,
            is_read=is_sent,
            is_sent=is_sent,
            related_type=RelatedType(related_type),
            related_data=related_data or {},
            created_at=now,
            updated_at=now,
        )
        self._insert(message)
        logger.info(
            "message_saved",
            message_id=message.id,
            related_type=message.related_type.value,
            is_sent=is_sent,
        )
        return message

    def create_draft(
        self,
        *,
        to: str = "",
        subject: str = "",
        body: str = "",
        related_data: dict[str, Any] | None = None,
    ) -> Message:
        """Store a new draft.  Drafts may be incomplete."""
        now = _now()
        draft = Message(
            id=uuid.uuid4().hex,
            to=to,
            from_address=self._default_from_address,
            subject=subject,
            body=body,
            is_draft=True,
            related_type=RelatedType.DRAFT,
            related_data=related_data or {},
            created_at=now,
            updated_at=now,
        )
        self._insert(draft)
        logger.info("draft_created", message_id=draft.id)
        return draft

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, message_id: str) -> Message | None:
        """Return the message with *message_id*, or ``None``."""
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM inbox_message WHERE id = ?",
            (message_id,),
        ).fetchone()
        return _row_to_message(row) if row is not None else None

    def _require(self, message_id: str) -> Message:
        message = self.get(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        return message

    def list_all(
        self,
        *,
        related_type: RelatedType | str | None = None,
        is_read: bool | None = None,
        limit: int | None = None,
    ) -> list[Message]:
        """Return messages newest first, optionally filtered.

        Args:
            related_type: Only messages about this subject (``order``,
                ``vendor_application`` ...).
            is_read: Only read (``True``) or unread (``False``) messages.
            limit: Maximum number of rows; ``None`` for all.

        Raises:
            ValueError: If *related_type* is not a known related type.
        """
        conditions: list[str] = []
        params: list[str | int] = []

        if related_type is not None:
            conditions.append("related_type = ?")
            params.append(RelatedType(related_type).value)

        if is_read is not None:
            conditions.append("is_read = ?")
            params.append(int(is_read))

        where_clause = ""
        if conditions:
            where_clause = "WHERE " + " AND ".join(conditions)

        query = (
            f"SELECT {_COLUMNS} FROM inbox_message {where_clause} "
            "ORDER BY created_at DESC, rowid DESC"
        )
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        rows = self._conn.execute(query, params).fetchall()
        return [_row_to_message(row) for row in rows]

    def section(
        self,
        section: Section | str,
        *,
        related_type: RelatedType | str | None = None,
        order: SortOrder | str = SortOrder.NEWEST,
        limit: int | None = None,
        now: datetime | None = None,
        resurface: bool = True,
    ) -> list[Message]:
        """Fetch the messages (of one related type, if given) and return one section."""
        return get_section(
            self.list_all(related_type=related_type),
            section,
            order=order,
            limit=limit,
            now=now,
            resurface=resurface,
        )

    def section_counts(
        self,
        *,
        now: datetime | None = None,
        resurface: bool = True,
    ) -> dict[Section, int]:
        """Fetch everything and count each badge-carrying section."""
        return count_all(self.list_all(), now=now, resurface=resurface)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def _update(self, message_id: str, fields: dict[str, Any]) -> Message:
        # Column names come from this module only, never from callers
        assignments = ", ".join(f"{column} = ?" for column in fields)
        cursor = self._conn.execute(
            f"UPDATE inbox_message SET {assignments}, updated_at = ? WHERE id = ?",
            (*fields.values(), _now().isoformat(), message_id),
        )
        if cursor.rowcount == 0:
            raise MessageNotFoundError(message_id)
        self._conn.commit()
        return self._require(message_id)

    def mark_read(self, message_id: str) -> Message:
        """Mark one message as read."""
        return self._update(message_id, {"is_read": 1})

    def set_starred(self, message_id: str, starred: bool = True) -> Message:
        """Star or unstar one message."""
        return self._update(message_id, {"is_starred": int(starred)})

    def snooze(self, message_id: str, until: datetime) -> Message:
        """Hide a message from inbox and unread until *until*.

        Naive datetimes are taken as UTC.

        Raises:
            InvalidMessageError: If *until* is not in the future.
            MessageNotFoundError: If *message_id* does not exist.
        """
        if until.tzinfo is None:
            until = until.replace(tzinfo=UTC)
        if until <= _now():
            raise InvalidMessageError("snooze_until must be in the future")
        return self._update(message_id, {"is_snoozed": 1, "snooze_until": until.isoformat()})

    def unsnooze(self, message_id: str) -> Message:
        """Bring a snoozed message back into inbox and unread."""
        return self._update(message_id, {"is_snoozed": 0, "snooze_until": None})

    def update_draft(
        self,
        message_id: str,
        *,
        to: str | None = None,
        subject: str | None = None,
        body: str | None = None,
    ) -> Message:
        """Edit the recipient, subject or body of a draft.

        Raises:
            MessageNotFoundError: If *message_id* does not exist.
            InvalidMessageError: If the message is not a draft.
        """
        draft = self._require(message_id)
        if not draft.is_draft:
            raise InvalidMessageError(f"Message '{message_id}' is not a draft")

        fields: dict[str, Any] = {}
        if to is not None:
            fields["to_address"] = to
        if subject is not None:
            fields["subject"] = subject
        if body is not None:
            fields["body"] = body
        if not fields:
            return draft
        return self._update(message_id, fields)

    def mark_sent(self, message_id: str) -> Message:
        """Turn a draft into a sent, read message.

        Raises:
            MessageNotFoundError: If *message_id* does not exist.
            InvalidMessageError: If the message is not a draft.
        """
        draft = self._require(message_id)
        if not draft.is_draft:
            raise InvalidMessageError(f"Message '{message_id}' is not a draft")
        return self._update(message_id, {"is_draft": 0, "is_sent": 1, "is_read": 1})

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, message_id: str) -> None:
        """Permanently remove a message.

        Raises:
            MessageNotFoundError: If *message_id* does not exist.
        """
        cursor = self._conn.execute("DELETE FROM inbox_message WHERE id = ?", (message_id,))
        if cursor.rowcount == 0:
            raise MessageNotFoundError(message_id)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Batched
    # ------------------------------------------------------------------

    def _apply_each(
        self,
        action: str,
        message_ids: Iterable[str],
        operation: Callable[[str], object],
    ) -> BatchResult:
        result = BatchResult()
        for message_id in message_ids:
            try:
                operation(message_id)
            except (MessageNotFoundError, sqlite3.Error) as exc:
                result.failures.append(BatchFailure(message_id=message_id, error=str(exc)))
            else:
                result.succeeded.append(message_id)

        if result.failures:
            logger.warning(
                "batch_partial_failure",
                action=action,
                succeeded=result.success_count,
                failed=result.failure_count,
            )
        return result

    def mark_many_read(self, message_ids: Iterable[str]) -> BatchResult:
        """Mark several messages as read, best effort."""
        return self._apply_each("mark_read", message_ids, self.mark_read)

    def delete_many(self, message_ids: Iterable[str]) -> BatchResult:
        """Delete several messages, best effort."""
        return self._apply_each("delete", message_ids, self.delete)

    def mark_all_read(self) -> BatchResult:
        """Mark every unread message as read, best effort."""
        unread_ids = [
            row[0]
            for row in self._conn.execute("SELECT id FROM inbox_message WHERE is_read = 0").fetchall()
        ]
        return self._apply_each("mark_all_read", unread_ids, self.mark_read)
