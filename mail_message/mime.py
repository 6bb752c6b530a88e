# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""MIME tree assembly for a :class:`~mail_message.models.Mail`.

Layout of the generated message:

- no attachments, no alternative: a single text/plain part
- alternative only: multipart/alternative (text/plain, alternative)
- attachments: multipart/mixed (body, attachment, ...), where body is the
  text part or the multipart/alternative block

HTML parts carrying related attachments are wrapped in multipart/related.
"""

from __future__ import annotations

from email import encoders
from email.message import Message
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.policy import compat32

from .attachment import Attachment, AttachmentKind
from .encoding import CRLF
from .headers import HeaderBuilder, default_builder, is_reserved
from .models import Mail

TEXT_CHARSET = "utf-8"
WIRE_POLICY = compat32.clone(linesep=CRLF)


def _strip_mime_version(part: Message) -> Message:
    # email.mime adds MIME-Version to every part; only the root keeps one.
    del part["MIME-Version"]
    return part


def _text_part(text: str) -> Message:
    return _strip_mime_version(MIMEText(text, "plain", TEXT_CHARSET))


def _binary_part(attachment: Attachment) -> Message:
    part = MIMEBase(attachment.maintype, attachment.subtype)
    part.set_payload(attachment.read_bytes())
    encoders.encode_base64(part)
    disposition = "inline" if attachment.inline else "attachment"
    if attachment.name:
        part.add_header("Content-Disposition", disposition, filename=attachment.name)
    else:
        part.add_header("Content-Disposition", disposition)
    return _strip_mime_version(part)


def _html_part(attachment: Attachment) -> Message:
    part = MIMEText(attachment.content or "", "html", attachment.charset)
    if attachment.inline:
        part.add_header("Content-Disposition", "inline")
    return _strip_mime_version(part)


def attachment_part(attachment: Attachment) -> Message:
    """Build the MIME part of one attachment, including its related parts."""
    if attachment.kind is AttachmentKind.HTML:
        part = _html_part(attachment)
    else:
        part = _binary_part(attachment)

    for name, value in attachment.additional_headers:
        if is_reserved(name):
            continue
        del part[name]
        part[name] = value

    if not attachment.related:
        return part
    related = _strip_mime_version(MIMEMultipart("related"))
    related.attach(part)
    for item in attachment.related:
        related.attach(attachment_part(item))
    return related


def build_mime(
    mail: Mail,
    *,
    headers: dict[str, str] | None = None,
    builder: HeaderBuilder | None = None,
) -> Message:
    """Return the complete MIME message for ``mail``.

    Args:
        mail: Message to serialize.
        headers: Precomputed header mapping; built with ``builder`` when omitted.
        builder: Header builder to use, the wall-clock default otherwise.
    """
    if headers is None:
        headers = (builder or default_builder).build(mail)

    body = _text_part(mail.text)
    if mail.alternative is not None:
        alternative = _strip_mime_version(MIMEMultipart("alternative"))
        alternative.attach(body)
        alternative.attach(attachment_part(mail.alternative))
        body = alternative

    if mail.attachments:
        root = _strip_mime_version(MIMEMultipart("mixed"))
        root.attach(body)
        for attachment in mail.attachments:
            root.attach(attachment_part(attachment))
    else:
        root = body

    for name, value in headers.items():
        del root[name]
        root[name] = value
    return root


def as_bytes(message: Message) -> bytes:
    """Serialize ``message`` with CRLF line endings for SMTP DATA."""
    return message.as_bytes(policy=WIRE_POLICY)
