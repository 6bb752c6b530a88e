# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for MIME tree assembly."""

import email

from mail_message.attachment import Attachment
from mail_message.mime import as_bytes, attachment_part, build_mime
from mail_message.models import Mail, User
from tests.helpers import FIXED_DATE


def content_types(message):
    return [part.get_content_type() for part in message.walk()]


class TestStructure:
    def test_plain_text_only(self, builder, sender, megaman):
        mail = Mail(from_=sender, to=[megaman], text="Humans and robots")
        message = build_mime(mail, builder=builder)
        assert content_types(message) == ["text/plain"]
        assert message.get_content_charset() == "utf-8"
        assert message.get_payload(decode=True).decode("utf-8") == "Humans and robots"

    def test_html_alternative(self, builder, sender, megaman):
        mail = Mail(from_=sender, to=[megaman], text="plain", html="<p>html</p>")
        message = build_mime(mail, builder=builder)
        assert content_types(message) == ["multipart/alternative", "text/plain", "text/html"]
        html_part = message.get_payload()[1]
        assert html_part.get_payload(decode=True).decode("utf-8") == "<p>html</p>"

    def test_attachments_with_alternative(self, builder, sender, megaman, png):
        mail = Mail(from_=sender, to=[megaman], text="plain", html="<p>html</p>", attachments=[png])
        message = build_mime(mail, builder=builder)
        assert content_types(message) == [
            "multipart/mixed",
            "multipart/alternative",
            "text/plain",
            "text/html",
            "image/png",
        ]

    def test_attachments_without_alternative(self, builder, sender, megaman, png):
        mail = Mail(from_=sender, to=[megaman], text="plain", attachments=[png])
        message = build_mime(mail, builder=builder)
        assert content_types(message) == ["multipart/mixed", "text/plain", "image/png"]
        part = message.get_payload()[1]
        assert part.get_filename() == "x.png"
        assert part.get("Content-Disposition").startswith("attachment")
        assert part.get_payload(decode=True) == png.content

    def test_related_parts_are_wrapped(self, builder, sender, megaman, png):
        html = Attachment.from_html("<img src='cid:x.png'>", related=[png])
        mail = Mail(from_=sender, to=[megaman], attachments=[html])
        message = build_mime(mail, builder=builder)
        assert content_types(message) == [
            "multipart/alternative",
            "text/plain",
            "multipart/related",
            "text/html",
            "image/png",
        ]

    def test_only_root_has_mime_version(self, builder, sender, megaman, png):
        """Nested parts drop the MIME-Version header the email package adds."""
        mail = Mail(from_=sender, to=[megaman], html="<p>x</p>", attachments=[png])
        message = build_mime(mail, builder=builder)
        assert message["MIME-Version"] == "1.0 (Mail-Message)"
        for part in list(message.walk())[1:]:
            assert part["MIME-Version"] is None


class TestHeaders:
    def test_root_carries_builder_headers(self, builder, sender, megaman, roll):
        mail = Mail(
            from_=sender,
            to=[megaman],
            bcc=[roll],
            subject="Hi",
            additional_headers={"X-Custom": "y", "Content-Type": "text/evil"},
        )
        message = build_mime(mail, builder=builder)
        assert message["Message-ID"] == mail.message_id
        assert message["Date"] == FIXED_DATE
        assert message["X-Custom"] == "y"
        assert message["Bcc"] is None
        assert message.get_content_type() == "text/plain"
        assert len(message.get_all("MIME-Version")) == 1

    def test_precomputed_headers_are_used(self, sender, megaman):
        mail = Mail(from_=sender, to=[megaman])
        message = build_mime(mail, headers={"X-ONLY": "1"})
        assert message["X-ONLY"] == "1"
        assert message["Message-ID"] is None


class TestAttachmentPart:
    def test_inline_disposition(self):
        att = Attachment.from_data(b"x", mime="image/gif", name="x.gif", inline=True)
        assert attachment_part(att)["Content-Disposition"].startswith("inline")

    def test_reserved_attachment_headers_skipped(self):
        att = Attachment.from_data(
            b"x",
            mime="image/gif",
            name="x.gif",
            additional_headers={"Content-ID": "<x.gif>", "Content-Type": "text/plain"},
        )
        part = attachment_part(att)
        assert part["Content-ID"] == "<x.gif>"
        assert part.get_content_type() == "image/gif"

    def test_file_attachment_is_read(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"hello")
        part = attachment_part(Attachment.from_file(path))
        assert part.get_payload(decode=True) == b"hello"
        assert part.get_filename() == "notes.txt"


def test_as_bytes_uses_crlf(builder, sender, megaman):
    mail = Mail(from_=sender, to=[megaman], text="line one\nline two", attachments=[])
    raw = as_bytes(build_mime(mail, builder=builder))
    assert b"\r\n\r\n" in raw
    assert b"\n" not in raw.replace(b"\r\n", b"")
    parsed = email.message_from_bytes(raw)
    assert parsed["Message-ID"] == mail.message_id
