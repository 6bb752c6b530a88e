# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Outbound mail composition.

Builds immutable mail values, derives their RFC 5322 headers and MIME
structure, and delivers them over SMTP.

Usage:
    from mail_message import Mail, User

    mail = Mail(
        from_=User(name="Dr. Light", email="light@example.com"),
        to=[User(name="Megaman", email="megaman@example.com")],
        subject="Hello",
        text="Plain body",
        html="<p>HTML body</p>",
    )
    mail.headers_string
"""

from .alternative import resolve_alternative
from .attachment import Attachment, AttachmentKind, guess_mime
from .config import MailConfig, SmtpConfig, load_settings
from .encoding import format_date, mime_encode
from .headers import RESERVED_HEADERS, HeaderBuilder, build_headers, render_headers
from .mime import as_bytes, build_mime
from .models import DEFAULT_PRODUCT_TAG, InvalidSenderAddressError, Mail, User
from .sender import SmtpMailSender

__all__ = [
    "Attachment",
    "AttachmentKind",
    "DEFAULT_PRODUCT_TAG",
    "HeaderBuilder",
    "InvalidSenderAddressError",
    "Mail",
    "MailConfig",
    "RESERVED_HEADERS",
    "SmtpConfig",
    "SmtpMailSender",
    "User",
    "as_bytes",
    "build_headers",
    "build_mime",
    "format_date",
    "guess_mime",
    "load_settings",
    "mime_encode",
    "render_headers",
    "resolve_alternative",
]
