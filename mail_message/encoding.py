# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Header value encoding and date formatting.

Both helpers are thin wrappers over the standard library ``email`` package:

- ``mime_encode``: RFC 2047 encoded-word (UTF-8, base64) for subjects and
  display names
- ``format_date``: RFC 5322 date-time for the DATE header
"""

from __future__ import annotations

from datetime import datetime
from email.header import Header
from email.utils import format_datetime

CRLF = "\r\n"
HEADER_CHARSET = "utf-8"


def mime_encode(text: str) -> str | None:
    """Return ``text`` as RFC 2047 encoded words, or ``None`` if it cannot be encoded.

    Empty input yields an empty string. Long values are folded with CRLF so
    the result can be placed directly into a header block.
    """
    if not text:
        return ""
    try:
        return Header(text, HEADER_CHARSET).encode(linesep=CRLF)
    except UnicodeError:
        return None


def format_date(value: datetime) -> str:
    """Format ``value`` as an RFC 5322 date, e.g. ``Mon, 19 Oct 2026 08:30:00 +0000``."""
    return format_datetime(value)


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()
