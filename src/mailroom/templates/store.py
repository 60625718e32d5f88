"""SQLite-backed template store: compiled-in defaults plus admin overrides.

Only overrides are persisted.  A type key with no row resolves to its
compiled-in default, so resetting a template is simply deleting its row.
Concurrent updates to the same key are last-write-wins.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime

import structlog

from mailroom.domain.models import Template, TemplateContent
from mailroom.domain.types import TemplateType, parse_template_type
from mailroom.templates.defaults import DEFAULT_TEMPLATES, get_default_template

logger = structlog.get_logger()


def init_template_table(conn: sqlite3.Connection) -> None:
    """Create the template_override table if it does not already exist.

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS template_override (
            type_key TEXT PRIMARY KEY,
            subject TEXT NOT NULL,
            body TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """)
    conn.commit()


class TemplateStore:
    """Resolve, override, and reset email templates.

    Args:
        conn: An open database connection whose database already has the
              ``template_override`` table (see ``init_template_table``).
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @property
    def template_types(self) -> list[TemplateType]:
        """Every type key the store can serve."""
        return list(TemplateType)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_template(self, type_key: str) -> Template | None:
        """Return the effective template for *type_key*.

        Args:
            type_key: A template key such as ``"orderShipped"``.

        Returns:
            The admin override if one exists, otherwise the compiled-in
            default, or ``None`` if *type_key* is not a known template type.
        """
        parsed = parse_template_type(type_key)
        if parsed is None:
            logger.warning("template_not_found", type_key=type_key)
            return None

        row = self._conn.execute(
            "SELECT subject, body, updated_at FROM template_override WHERE type_key = ?",
            (parsed.value,),
        ).fetchone()

        if row is None:
            return get_default_template(parsed)

        subject, body, updated_at = row
        return Template(
            type_key=parsed,
            subject=subject,
            body=body,
            is_custom=True,
            updated_at=datetime.fromisoformat(updated_at),
        )

    def get_default_template(self, type_key: str) -> Template | None:
        """Return the compiled-in template for *type_key*, ignoring overrides."""
        parsed = parse_template_type(type_key)
        if parsed is None:
            return None
        return get_default_template(parsed)

    def list_templates(self) -> dict[TemplateType, Template]:
        """Return the effective template for every type key."""
        templates: dict[TemplateType, Template] = dict(DEFAULT_TEMPLATES)
        rows = self._conn.execute(
            "SELECT type_key, subject, body, updated_at FROM template_override"
        ).fetchall()
        for type_key, subject, body, updated_at in rows:
            parsed = parse_template_type(type_key)
            if parsed is None:
                # Row left behind by a retired template type
                continue
            templates[parsed] = Template(
                type_key=parsed,
                subject=subject,
                body=body,
                is_custom=True,
                updated_at=datetime.fromisoformat(updated_at),
            )
        return templates

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def update_template(self, type_key: str, content: TemplateContent) -> bool:
        """Save an admin override for *type_key*.

        Subject and body are written together in a single statement.

        Args:
            type_key: The template to override.
            content: The new subject/body pair.

        Returns:
            ``True`` if the override was saved, ``False`` if *type_key* is not
            a known template type.
        """
        parsed = parse_template_type(type_key)
        if parsed is None:
            logger.warning("template_update_rejected", type_key=type_key)
            return False

        now = datetime.now(tz=UTC).isoformat()
        self._conn.execute(
            "INSERT OR REPLACE INTO template_override (type_key, subject, body, updated_at) "
            "VALUES (?, ?, ?, ?)",
            (parsed.value, content.subject, content.body, now),
        )
        self._conn.commit()
        logger.info("template_override_saved", type_key=parsed.value)
        return True

    def reset_template(self, type_key: str) -> bool:
        """Delete the override for *type_key* so the default applies again.

        Returns:
            ``True`` on success (including when there was no override),
            ``False`` if *type_key* is not a known template type.
        """
        parsed = parse_template_type(type_key)
        if parsed is None:
            logger.warning("template_reset_rejected", type_key=type_key)
            return False

        self._conn.execute("DELETE FROM template_override WHERE type_key = ?", (parsed.value,))
        self._conn.commit()
        logger.info("template_override_reset", type_key=parsed.value)
        return True
