# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Header block construction for outbound mail.

HeaderBuilder computes the header mapping of a :class:`~mail_message.models.Mail`
each time it is asked; nothing is cached, so DATE follows the injected clock.

Order of the generated headers:
    MESSAGE-ID, DATE, FROM, TO, CC (only with cc recipients), SUBJECT,
    MIME-VERSION, then caller-supplied additional headers.

Additional headers are upper-cased and override computed ones with the same
name. The content-structural names in ``RESERVED_HEADERS`` belong to the body
serializer and are never taken from caller input. BCC is never emitted.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from .encoding import CRLF, format_date, local_now, mime_encode

if TYPE_CHECKING:
    from .models import Mail

RESERVED_HEADERS = frozenset({
    "CONTENT-TYPE",
    "CONTENT-DISPOSITION",
    "CONTENT-TRANSFER-ENCODING",
})


def header_pairs(value: Any) -> tuple[tuple[str, str], ...]:
    """Normalise a mapping or an iterable of ``(name, value)`` pairs into a tuple of pairs.

    Caller order is kept, which makes last-write-wins among duplicates deterministic.
    """
    if value is None:
        return ()
    if isinstance(value, Mapping):
        items: Iterable[Any] = value.items()
    else:
        items = value
    pairs = []
    for item in items:
        name, header_value = item
        pairs.append((str(name), str(header_value)))
    return tuple(pairs)


def is_reserved(name: str) -> bool:
    """Return ``True`` for headers owned by the body/attachment serializer."""
    return name.upper() in RESERVED_HEADERS


class HeaderBuilder:
    """Build the RFC 5322 header set of a mail.

    Args:
        clock: Zero-argument callable returning the timestamp used for DATE.
            Defaults to the current local time.
        date_formatter: Callable turning that timestamp into a header value.
        encoder: RFC 2047 encoder used for SUBJECT; returns ``None`` on failure.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        date_formatter: Callable[[datetime], str] = format_date,
        encoder: Callable[[str], str | None] = mime_encode,
    ):
        self.clock = clock or local_now
        self.date_formatter = date_formatter
        self.encoder = encoder

    def build(self, mail: Mail) -> dict[str, str]:
        """Return a fresh ``NAME -> value`` mapping for ``mail``."""
        headers: dict[str, str] = {}
        headers["MESSAGE-ID"] = mail.message_id
        headers["DATE"] = self.date_formatter(self.clock())
        headers["FROM"] = mail.from_.mime
        headers["TO"] = ", ".join(user.mime for user in mail.to)
        if mail.cc:
            headers["CC"] = ", ".join(user.mime for user in mail.cc)
        headers["SUBJECT"] = self.encoder(mail.subject) or ""
        headers["MIME-VERSION"] = f"1.0 ({mail.product_tag})"

        for name, value in mail.additional_headers:
            key = name.upper()
            if key in RESERVED_HEADERS:
                continue
            headers[key] = value
        return headers

    def render(self, mail: Mail) -> str:
        """Return the header block as ``NAME: value`` lines joined by CRLF."""
        return CRLF.join(f"{name}: {value}" for name, value in self.build(mail).items())


default_builder = HeaderBuilder()


def build_headers(mail: Mail) -> dict[str, str]:
    """Build headers with the default, wall-clock based builder."""
    return default_builder.build(mail)


def render_headers(mail: Mail) -> str:
    """Render headers with the default, wall-clock based builder."""
    return default_builder.render(mail)
