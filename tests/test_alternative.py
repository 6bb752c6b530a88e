# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for selection of the alternative body part."""

from mail_message.alternative import resolve_alternative
from mail_message.attachment import Attachment


def html_alt(content: str) -> Attachment:
    return Attachment.from_html(content, alternative=True)


class TestWithHtml:
    def test_html_builds_fresh_alternative(self, png):
        alternative, remaining = resolve_alternative([png], "<p>hi</p>")
        assert alternative.is_alternative
        assert alternative.content == "<p>hi</p>"
        assert remaining == (png,)

    def test_all_stray_alternatives_are_dropped(self, png):
        a = html_alt("<p>a</p>")
        c = html_alt("<p>c</p>")
        alternative, remaining = resolve_alternative([a, png, c], "<p>explicit</p>")
        assert alternative.content == "<p>explicit</p>"
        assert alternative is not a and alternative is not c
        assert remaining == (png,)

    def test_empty_html_still_counts_as_present(self):
        """An empty html string still wins over alternative-flagged attachments."""
        stray = html_alt("<p>stray</p>")
        alternative, remaining = resolve_alternative([stray], "")
        assert alternative.content == ""
        assert remaining == ()

    def test_non_alternative_html_attachment_is_kept(self):
        plain_html = Attachment.from_html("<p>keep</p>", alternative=False)
        _, remaining = resolve_alternative([plain_html], "<p>body</p>")
        assert remaining == (plain_html,)


class TestWithoutHtml:
    def test_last_alternative_wins(self):
        a = html_alt("<p>a</p>")
        b = Attachment.from_data(b"b", mime="text/plain", name="b.txt")
        c = html_alt("<p>c</p>")
        alternative, remaining = resolve_alternative([a, b, c], None)
        assert alternative is c
        assert remaining == (a, b)

    def test_remaining_order_is_preserved(self, png):
        a = html_alt("<p>a</p>")
        doc = Attachment.from_data(b"doc", mime="application/pdf", name="doc.pdf")
        alternative, remaining = resolve_alternative([png, a, doc], None)
        assert alternative is a
        assert remaining == (png, doc)

    def test_no_alternative_passthrough(self, png):
        doc = Attachment.from_data(b"doc", mime="application/pdf", name="doc.pdf")
        alternative, remaining = resolve_alternative([png, doc], None)
        assert alternative is None
        assert remaining == (png, doc)

    def test_empty_input(self):
        assert resolve_alternative([], None) == (None, ())
