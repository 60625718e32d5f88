"""Command-line interface for the admin mailbox and template pipeline.

Usage::

    mailroom counts
    mailroom list --section unread --order oldest --limit 20
    mailroom list --section all --type order
    mailroom inspect body.html --format json
    mailroom render orderShipped --var firstName=Amina --var orderId=A1B2
    mailroom templates
    mailroom reset-template orderShipped
    mailroom send orderShipped customer@example.com --var firstName=Amina
    mailroom send-draft 3f2a9c...
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from mailroom.config import Settings, get_settings, validate_credentials
from mailroom.content.metadata import extract_text_preview
from mailroom.content.presenter import build_email_view
from mailroom.database import close_database, open_database
from mailroom.domain.errors import MailroomError
from mailroom.domain.models import Message
from mailroom.domain.types import RelatedType, Section, SortOrder
from mailroom.inbox.sections import count_all, count_by_type, search_messages
from mailroom.inbox.store import MessageStore
from mailroom.mailer import Mailer
from mailroom.observability import configure_logging
from mailroom.templates.renderer import render_template
from mailroom.templates.store import TemplateStore
from mailroom.transport.brevo import BrevoTransport


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all subcommands.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="mailroom",
        description="Inspect the admin mailbox and email templates",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Path to the mail database (default: DATABASE_PATH setting)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("counts", help="Show message counts per section and type")

    list_parser = subparsers.add_parser("list", help="List the messages in a section")
    list_parser.add_argument(
        "--section",
        type=str,
        choices=[s.value for s in Section],
        default=Section.INBOX.value,
        help="Section to list (default: inbox)",
    )
    list_parser.add_argument(
        "--order",
        type=str,
        choices=[o.value for o in SortOrder],
        default=SortOrder.NEWEST.value,
        help="Sort by creation time (default: newest)",
    )
    list_parser.add_argument("--limit", type=int, default=None, help="Maximum results")
    list_parser.add_argument("--search", type=str, default="", help="Filter by subject or recipient")
    list_parser.add_argument(
        "--type",
        dest="related_type",
        type=str,
        choices=[t.value for t in RelatedType],
        default=None,
        help="Only messages about this subject, e.g. order",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Classify and summarize an HTML body")
    inspect_parser.add_argument("path", type=str, help="HTML file to inspect, or '-' for stdin")

    render_parser = subparsers.add_parser("render", help="Render a template with variables")
    render_parser.add_argument("type_key", type=str, help="Template type, e.g. orderShipped")
    render_parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Template variable (repeatable)",
    )

    subparsers.add_parser("templates", help="List template types and whether they are overridden")

    reset_parser = subparsers.add_parser("reset-template", help="Revert a template to its default")
    reset_parser.add_argument("type_key", type=str, help="Template type, e.g. orderShipped")

    send_parser = subparsers.add_parser("send", help="Render a template and send it through Brevo")
    send_parser.add_argument("type_key", type=str, help="Template type, e.g. orderShipped")
    send_parser.add_argument("to", type=str, help="Recipient email address")
    send_parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Template variable (repeatable)",
    )

    draft_parser = subparsers.add_parser("send-draft", help="Send a stored draft through Brevo")
    draft_parser.add_argument("message_id", type=str, help="Draft message id")

    return parser


def parse_variables(pairs: list[str]) -> dict[str, str]:
    """Turn ``NAME=VALUE`` strings into a substitution context.

    Raises:
        ValueError: If an entry has no ``=``.
    """
    context: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            msg = f"Expected NAME=VALUE, got {pair!r}"
            raise ValueError(msg)
        context[name] = value
    return context


def format_rows(headers: list[str], widths: list[int], rows: list[list[Any]]) -> str:
    """Format rows as a fixed-width table with a header rule."""

    def truncate(value: Any, width: int) -> str:
        s = str(value if value is not None else "")
        if len(s) > width:
            return s[: width - 3] + "..."
        return s

    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True))
    lines = [header_line, "-" * len(header_line)]
    for row in rows:
        lines.append(
            "  ".join(truncate(c, w).ljust(w) for c, w in zip(row, widths, strict=True)).rstrip()
        )
    return "\n".join(lines)


def _message_summary(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "created_at": message.created_at.isoformat(),
        "to": message.to,
        "subject": message.subject,
        "is_read": message.is_read,
        "is_starred": message.is_starred,
        "preview": extract_text_preview(message.body),
    }


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _emit(output_format: str, payload: Any, table: str) -> None:
    if output_format == "json":
        print(json.dumps(payload, indent=2))
    else:
        print(table)


def _build_mailer(
    settings: Settings,
    templates: TemplateStore,
    messages: MessageStore,
    transport: BrevoTransport,
) -> Mailer:
    return Mailer(
        templates,
        messages,
        transport,
        from_address=settings.brevo_sender_email or settings.default_from_address,
        sender_name=settings.sender_name,
    )


def main(argv: list[str] | None = None) -> int:
    """Run one CLI command and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    if not structlog.is_configured():
        configure_logging(settings)

    if args.command == "inspect":
        view = build_email_view(
            _read_source(args.path),
            preview_length=settings.preview_length,
            words_per_minute=settings.words_per_minute,
        )
        payload = {
            "template_type": view.template_type,
            "is_template": view.is_template,
            **view.metadata.model_dump(),
            "preview": view.preview,
        }
        table = "\n".join(f"{key:<24}{value}" for key, value in payload.items())
        _emit(args.output_format, payload, table)
        return 0

    conn = open_database(args.db or settings.database_path)
    try:
        templates = TemplateStore(conn)
        messages = MessageStore(conn, default_from_address=settings.default_from_address)

        if args.command == "counts":
            all_messages = messages.list_all()
            sections = count_all(all_messages, resurface=settings.snooze_resurface)
            payload = {
                "sections": {str(k): v for k, v in sections.items()},
                "types": count_by_type(all_messages),
            }
            rows = [[k, v] for k, v in payload["sections"].items()]
            rows += [[f"type:{k}", v] for k, v in payload["types"].items()]
            _emit(args.output_format, payload, format_rows(["Section", "Count"], [20, 8], rows))
            return 0

        if args.command == "list":
            selected = messages.section(
                args.section,
                related_type=args.related_type,
                order=args.order,
                limit=None,
                resurface=settings.snooze_resurface,
            )
            selected = search_messages(selected, args.search)
            limit = args.limit if args.limit is not None else settings.section_limit
            summaries = [_message_summary(m) for m in selected[:limit]]
            if not summaries and args.output_format == "table":
                print("No emails in this section.")
                return 0
            rows = [[s["created_at"], s["to"], s["subject"], s["preview"]] for s in summaries]
            table = format_rows(["Created", "To", "Subject", "Preview"], [25, 25, 30, 40], rows)
            _emit(args.output_format, summaries, table)
            return 0

        if args.command == "render":
            try:
                context = parse_variables(args.var)
            except ValueError as exc:
                print(str(exc), file=sys.stderr)
                return 2
            rendered = render_template(templates, args.type_key, context)
            if rendered is None:
                print(f"Unknown template type: {args.type_key}", file=sys.stderr)
                return 1
            payload = {"subject": rendered.subject, "body": rendered.body}
            _emit(args.output_format, payload, f"Subject: {rendered.subject}\n\n{rendered.body}")
            return 0

        if args.command == "templates":
            listed = templates.list_templates()
            payload = {
                str(k): {
                    "subject": t.subject,
                    "is_custom": t.is_custom,
                    "updated_at": t.updated_at.isoformat() if t.updated_at else None,
                }
                for k, t in listed.items()
            }
            rows = [
                [k, "custom" if v["is_custom"] else "default", v["subject"]]
                for k, v in payload.items()
            ]
            table = format_rows(["Type", "Source", "Subject"], [20, 8, 50], rows)
            _emit(args.output_format, payload, table)
            return 0

        if args.command == "reset-template":
            if not templates.reset_template(args.type_key):
                print(f"Unknown template type: {args.type_key}", file=sys.stderr)
                return 1
            print(f"Template '{args.type_key}' reset to default.")
            return 0

        if args.command in ("send", "send-draft"):
            try:
                context = parse_variables(getattr(args, "var", []))
            except ValueError as exc:
                print(str(exc), file=sys.stderr)
                return 2
            validate_credentials(settings)
            transport = BrevoTransport(
                settings.brevo_api_key.get_secret_value(),
                base_url=settings.brevo_base_url,
            )
            mailer = _build_mailer(settings, templates, messages, transport)
            try:
                if args.command == "send":
                    sent = mailer.send_template(args.type_key, args.to, context)
                else:
                    sent = mailer.send_draft(args.message_id)
            except MailroomError as exc:
                print(str(exc), file=sys.stderr)
                return 1
            finally:
                transport.close()
            _emit(args.output_format, _message_summary(sent), f"Sent {sent.id} to {sent.to}")
            return 0
    finally:
        close_database(conn)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
