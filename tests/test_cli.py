"""Tests for the mailroom command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mailroom.cli import build_parser, format_rows, main, parse_variables
from mailroom.database import close_database, open_database
from mailroom.domain.models import TemplateContent
from mailroom.domain.types import RelatedType
from mailroom.inbox.store import MessageStore
from mailroom.templates.store import TemplateStore


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """A mail database seeded with a few messages."""
    path = tmp_path / "mail" / "mailroom.db"
    conn = open_database(path)
    store = MessageStore(conn)
    store.save_message(
        to="admin@aruviah.com",
        subject="New vendor application",
        body="<p>Kente House would like to join</p>",
        related_type=RelatedType.VENDOR_APPLICATION,
        related_data={"businessName": "Kente House"},
    )
    store.save_message(
        to="customer@example.com",
        subject="Order Confirmed - A1B2",
        body="<p>Thanks</p>",
        related_type=RelatedType.ORDER,
        is_sent=True,
    )
    store.create_draft(subject="Reply later")
    close_database(conn)
    return str(path)


def _json_out(capsys: pytest.CaptureFixture[str]) -> object:
    return json.loads(capsys.readouterr().out)


class TestHelpers:
    """Tests for argument helpers."""

    def test_parse_variables(self) -> None:
        assert parse_variables(["firstName=Amina", "note=a=b"]) == {
            "firstName": "Amina",
            "note": "a=b",
        }

    def test_parse_variables_rejects_missing_equals(self) -> None:
        with pytest.raises(ValueError, match="NAME=VALUE"):
            parse_variables(["firstName"])

    def test_format_rows_truncates(self) -> None:
        table = format_rows(["A", "B"], [4, 6], [["abcdefgh", "x"]])
        lines = table.splitlines()
        assert lines[0].startswith("A")
        assert set(lines[1]) == {"-"}
        assert lines[2].startswith("a...")

    def test_parser_requires_command(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCounts:
    """Tests for the counts command."""

    def test_counts_json(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--db", db_path, "--format", "json", "counts"]) == 0
        payload = _json_out(capsys)
        assert payload == {
            "sections": {
                "inbox": 1,
                "unread": 1,
                "starred": 0,
                "snoozed": 0,
                "draft": 1,
                "sent": 1,
            },
            "types": {
                "total": 3,
                "unread": 2,
                "draft": 1,
                "order": 1,
                "vendor_application": 1,
            },
        }

    def test_counts_table(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--db", db_path, "counts"]) == 0
        out = capsys.readouterr().out
        assert "inbox" in out
        assert "type:order" in out


class TestList:
    """Tests for the list command."""

    def test_list_sent_json(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--db", db_path, "--format", "json", "list", "--section", "sent"]) == 0
        rows = _json_out(capsys)
        assert isinstance(rows, list)
        assert [r["subject"] for r in rows] == ["Order Confirmed - A1B2"]
        assert rows[0]["preview"] == "Thanks"

    def test_list_search(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        argv = ["--db", db_path, "--format", "json", "list", "--section", "all", "--search", "kente"]
        assert main(argv) == 0
        rows = _json_out(capsys)
        assert [r["subject"] for r in rows] == ["New vendor application"]

    def test_list_by_type(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        argv = ["--db", db_path, "--format", "json", "list", "--section", "all", "--type", "order"]
        assert main(argv) == 0
        rows = _json_out(capsys)
        assert [r["subject"] for r in rows] == ["Order Confirmed - A1B2"]

    def test_list_rejects_unknown_type(self, db_path: str) -> None:
        with pytest.raises(SystemExit):
            main(["--db", db_path, "list", "--type", "invoice"])

    def test_empty_section_message(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--db", db_path, "list", "--section", "starred"]) == 0
        assert "No emails in this section." in capsys.readouterr().out


class TestInspect:
    """Tests for the inspect command."""

    def test_inspect_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        body = tmp_path / "body.html"
        body.write_text(
            '<h1>Your order has shipped</h1><img src="box.png"><p>Hi {{firstName}}</p>',
            encoding="utf-8",
        )
        assert main(["--format", "json", "inspect", str(body)]) == 0
        payload = _json_out(capsys)
        assert payload["template_type"] == "orderShipped"
        assert payload["is_template"] is True
        assert payload["image_count"] == 1
        assert payload["estimated_read_minutes"] == 1


class TestTemplates:
    """Tests for render, templates, and reset-template."""

    def test_render_json(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(
            ["--db", db_path, "--format", "json", "render", "orderShipped", "--var", "orderId=A1B2"]
        )
        assert code == 0
        payload = _json_out(capsys)
        assert payload["subject"] == "Your Order Has Shipped! A1B2"

    def test_render_bad_variable(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--db", db_path, "render", "welcome", "--var", "oops"]) == 2
        assert "NAME=VALUE" in capsys.readouterr().err

    def test_render_unknown_type(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--db", db_path, "render", "invoice"]) == 1
        assert "Unknown template type: invoice" in capsys.readouterr().err

    def test_templates_lists_overrides(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        conn = open_database(db_path)
        TemplateStore(conn).update_template("welcome", TemplateContent(subject="Hey", body="<p>Hey</p>"))
        close_database(conn)

        assert main(["--db", db_path, "--format", "json", "templates"]) == 0
        payload = _json_out(capsys)
        assert len(payload) == 11
        assert payload["welcome"]["is_custom"] is True
        assert payload["welcome"]["subject"] == "Hey"
        assert payload["newsletter"]["is_custom"] is False

    def test_reset_template(self, db_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--db", db_path, "reset-template", "welcome"]) == 0
        assert "Template 'welcome' reset to default." in capsys.readouterr().out

    def test_reset_unknown_template(self, db_path: str) -> None:
        assert main(["--db", db_path, "reset-template", "invoice"]) == 1


class TestSend:
    """Tests for send and send-draft."""

    @pytest.fixture
    def transport(self, monkeypatch: pytest.MonkeyPatch) -> MagicMock:
        monkeypatch.setenv("BREVO_API_KEY", "xkeysib-test")
        monkeypatch.setenv("BREVO_SENDER_EMAIL", "orders@aruviah.com")
        instance = MagicMock()
        instance.send.return_value = "<provider-id>"
        monkeypatch.setattr("mailroom.cli.BrevoTransport", MagicMock(return_value=instance))
        return instance

    def test_send_template(
        self, db_path: str, transport: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(
            [
                "--db",
                db_path,
                "--format",
                "json",
                "send",
                "welcome",
                "new@example.com",
                "--var",
                "firstName=Amina",
            ]
        )
        assert code == 0
        summary = _json_out(capsys)
        assert summary["to"] == "new@example.com"
        email = transport.send.call_args.args[0]
        assert email.from_address == "orders@aruviah.com"
        assert "Welcome Amina!" in email.html_body
        transport.close.assert_called_once()

    def test_send_unknown_draft(
        self, db_path: str, transport: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--db", db_path, "send-draft", "missing"]) == 1
        assert "Message 'missing' does not exist" in capsys.readouterr().err
        transport.send.assert_not_called()
