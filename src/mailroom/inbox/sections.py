"""Derive mailbox sections from message flags.

Sections are views, not stored partitions: membership is recomputed from a
message's flags on every query, so there is no second copy of the truth to
drift.  Sorting is applied after filtering and never affects membership.

Snoozed messages resurface lazily.  When ``resurface`` is on, a message whose
``snooze_until`` has passed counts as not snoozed at query time, without any
write to the store.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime

from mailroom.domain.models import Message
from mailroom.domain.types import COUNTED_SECTIONS, Section, SortOrder


def _reference_time(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(tz=UTC)
    # Naive reference times are UTC, matching Message
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now


def is_effectively_snoozed(message: Message, now: datetime, *, resurface: bool = True) -> bool:
    """Return ``True`` if *message* should be hidden as snoozed at *now*."""
    if not message.is_snoozed:
        return False
    if not resurface or message.snooze_until is None:
        return True
    return message.snooze_until > _reference_time(now)


# Each predicate receives the message and whether it is effectively snoozed
SECTION_PREDICATES: dict[Section, Callable[[Message, bool], bool]] = {
    Section.INBOX: lambda m, snoozed: not snoozed and not m.is_draft and not m.is_sent,
    Section.UNREAD: lambda m, snoozed: not m.is_read and not snoozed and not m.is_draft,
    Section.STARRED: lambda m, snoozed: m.is_starred,
    Section.SNOOZED: lambda m, snoozed: snoozed,
    Section.DRAFT: lambda m, snoozed: m.is_draft,
    Section.SENT: lambda m, snoozed: m.is_sent,
    Section.ALL: lambda m, snoozed: True,
}


def _predicate(section: Section, now: datetime, resurface: bool) -> Callable[[Message], bool]:
    check = SECTION_PREDICATES[section]
    return lambda m: check(m, is_effectively_snoozed(m, now, resurface=resurface))


def in_section(
    message: Message,
    section: Section | str,
    *,
    now: datetime | None = None,
    resurface: bool = True,
) -> bool:
    """Return ``True`` if *message* belongs to *section*.

    Args:
        message: The message to test.
        section: Section name (``inbox``, ``unread``, ``starred``,
            ``snoozed``, ``draft``, ``sent`` or ``all``).
        now: Reference time for snooze expiry.  Defaults to the current time.
        resurface: Treat elapsed snoozes as unsnoozed.

    Raises:
        ValueError: If *section* is not a known section name.
    """
    now = _reference_time(now)
    return _predicate(Section(section), now, resurface)(message)


def filter_section(
    messages: Iterable[Message],
    section: Section | str,
    *,
    now: datetime | None = None,
    resurface: bool = True,
) -> list[Message]:
    """Return the messages in *section*, keeping their input order."""
    now = _reference_time(now)
    predicate = _predicate(Section(section), now, resurface)
    return [m for m in messages if predicate(m)]


def count_all(
    messages: Sequence[Message],
    *,
    now: datetime | None = None,
    resurface: bool = True,
) -> dict[Section, int]:
    """Count the messages in each badge-carrying section.

    Returns:
        A mapping with one entry per section except ``all``.
    """
    now = _reference_time(now)
    counts: dict[Section, int] = {}
    for section in COUNTED_SECTIONS:
        predicate = _predicate(section, now, resurface)
        counts[section] = sum(1 for m in messages if predicate(m))
    return counts


def sort_messages(
    messages: Iterable[Message],
    order: SortOrder | str = SortOrder.NEWEST,
) -> list[Message]:
    """Sort messages by creation time, newest or oldest first."""
    return sorted(
        messages,
        key=lambda m: m.created_at,
        reverse=SortOrder(order) == SortOrder.NEWEST,
    )


def get_section(
    messages: Iterable[Message],
    section: Section | str,
    *,
    order: SortOrder | str = SortOrder.NEWEST,
    limit: int | None = None,
    now: datetime | None = None,
    resurface: bool = True,
) -> list[Message]:
    """Filter to *section*, then sort, then truncate to *limit*.

    Args:
        messages: The full message collection.
        section: Section name.
        order: ``newest`` or ``oldest`` first by ``created_at``.
        limit: Maximum number of messages returned; ``None`` for no limit.
        now: Reference time for snooze expiry.
        resurface: Treat elapsed snoozes as unsnoozed.

    Returns:
        The section's messages in the requested order.
    """
    selected = sort_messages(
        filter_section(messages, section, now=now, resurface=resurface),
        order,
    )
    if limit is not None:
        return selected[:limit]
    return selected


def search_messages(messages: Iterable[Message], term: str) -> list[Message]:
    """Case-insensitive search over subject, recipient, and related contact.

    Matches ``subject``, ``to``, and the ``businessName`` and ``email``
    entries of ``related_data``.  A blank term matches everything.
    """
    needle = term.strip().lower()
    if not needle:
        return list(messages)

    def matches(message: Message) -> bool:
        haystacks = [
            message.subject,
            message.to,
            message.related_data.get("businessName"),
            message.related_data.get("email"),
        ]
        return any(isinstance(h, str) and needle in h.lower() for h in haystacks)

    return [m for m in messages if matches(m)]


def count_by_type(messages: Sequence[Message]) -> dict[str, int]:
    """Count messages per related type, plus ``total`` and ``unread``."""
    counts: dict[str, int] = {"total": len(messages), "unread": 0}
    for message in messages:
        key = message.related_type.value
        counts[key] = counts.get(key, 0) + 1
        if not message.is_read:
            counts["unread"] += 1
    return counts
