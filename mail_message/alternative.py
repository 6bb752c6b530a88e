# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Selection of the alternative (HTML) rendering of a mail body."""

from __future__ import annotations

from collections.abc import Iterable

from .attachment import Attachment
from .logger import get_logger

logger = get_logger("MailMessage.alternative")


def resolve_alternative(
    attachments: Iterable[Attachment],
    html: str | None,
) -> tuple[Attachment | None, tuple[Attachment, ...]]:
    """Split ``attachments`` into the alternative part and the remaining attachments.

    With ``html`` (any string, empty included) a new alternative part is built
    from it and every alternative-flagged attachment is discarded.

    Without ``html`` the last alternative-flagged attachment becomes the
    alternative and is removed; the other attachments keep their order.

    Returns:
        ``(alternative, attachments)``; ``alternative`` is ``None`` when there is none.
    """
    items = tuple(attachments)

    if html is not None:
        filtered = tuple(att for att in items if not att.is_alternative)
        dropped = len(items) - len(filtered)
        if dropped:
            logger.debug("Discarding %d alternative attachment(s) superseded by html body", dropped)
        return Attachment.from_html(html, alternative=True), filtered

    for index in range(len(items) - 1, -1, -1):
        if items[index].is_alternative:
            return items[index], items[:index] + items[index + 1:]
    return None, items
