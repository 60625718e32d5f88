"""Admin mailbox: message persistence and section views."""

from mailroom.inbox.sections import (
    count_all,
    count_by_type,
    filter_section,
    get_section,
    in_section,
    is_effectively_snoozed,
    search_messages,
    sort_messages,
)
from mailroom.inbox.store import MessageStore, init_message_table

__all__ = [
    "MessageStore",
    "count_all",
    "count_by_type",
    "filter_section",
    "get_section",
    "in_section",
    "init_message_table",
    "is_effectively_snoozed",
    "search_messages",
    "sort_messages",
]
