# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pydantic models for outbound mail.

Models:
    - User: Sender or recipient identity
    - Mail: Immutable message with resolved alternative body and attachments

A Mail is built once: the alternative rendering is chosen during validation
(see :func:`mail_message.alternative.resolve_alternative`) and the model is
frozen afterwards. Headers are derived on every access.
"""

from __future__ import annotations

from typing import Annotated, Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .alternative import resolve_alternative
from .attachment import Attachment
from .encoding import mime_encode
from .headers import build_headers, header_pairs, render_headers

DEFAULT_PRODUCT_TAG = "Mail-Message"


class InvalidSenderAddressError(ValueError):
    """Raised when the sender address has no ``@`` to derive the hostname from."""

    def __init__(self, email: str, message: str | None = None):
        super().__init__(message or f"Sender address has no domain part: {email!r}")
        self.email = email
        self.code = "invalid_sender_address"


def _new_uuid() -> str:
    return str(uuid4()).upper()


class User(BaseModel):
    """A sending or receiving identity.

    Attributes:
        name: Optional display name.
        email: Mailbox address, not validated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = None
    email: str

    @property
    def mime(self) -> str:
        """Header rendering: ``"<encoded name> <email>"`` or the bare address."""
        if self.name:
            encoded = mime_encode(self.name)
            if encoded:
                return f"{encoded} <{self.email}>"
        return self.email


class Mail(BaseModel):
    """An email ready to be serialized and sent.

    Attributes:
        uuid: Identifier generated once per mail.
        from_: Sender (alias ``from``).
        to: Primary recipients.
        cc: Carbon-copy recipients.
        bcc: Blind-copy recipients, used for the envelope only.
        subject: Subject line.
        text: Plain text body.
        html: HTML body; when given it becomes the alternative part.
        attachments: Attachments left after removing the alternative part.
        alternative: Alternative rendering of the text body, if any.
        additional_headers: Extra headers as ``(name, value)`` pairs in caller order.
        product_tag: Tag used in the message-id and MIME-VERSION header.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    uuid: Annotated[str, Field(default_factory=_new_uuid)]
    from_: Annotated[User, Field(alias="from")]
    to: tuple[User, ...]
    cc: tuple[User, ...] = ()
    bcc: tuple[User, ...] = ()
    subject: str = ""
    text: str = ""
    html: str | None = None
    attachments: tuple[Attachment, ...] = ()
    alternative: Attachment | None = None
    additional_headers: Annotated[
        tuple[tuple[str, str], ...],
        Field(default=(), description="Extra headers as (name, value) pairs"),
    ]
    product_tag: str = DEFAULT_PRODUCT_TAG

    @model_validator(mode="before")
    @classmethod
    def split_alternative(cls, data: Any) -> Any:
        """Resolve the alternative part before the fields are frozen.

        An ``alternative`` passed without ``html`` (e.g. when re-validating a
        dumped mail) counts as the last alternative-flagged attachment.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        attachments = [_as_attachment(att) for att in (data.get("attachments") or ())]
        carried = data.pop("alternative", None)
        html = data.get("html")
        if html is None and carried is not None:
            attachments.append(_as_attachment(carried))
        data["alternative"], data["attachments"] = resolve_alternative(attachments, html)
        return data

    @field_validator("additional_headers", mode="before")
    @classmethod
    def normalise_headers(cls, v: Any) -> tuple[tuple[str, str], ...]:
        return header_pairs(v)

    @property
    def hostname(self) -> str:
        """Domain part of the sender address (text after the first ``@``).

        Raises:
            InvalidSenderAddressError: If the sender address contains no ``@``.
        """
        _, sep, host = self.from_.email.partition("@")
        if not sep:
            raise InvalidSenderAddressError(self.from_.email)
        return host

    @property
    def message_id(self) -> str:
        """RFC 5322 message-id, ``<uuid.tag@hostname>``."""
        return f"<{self.uuid}.{self.product_tag}@{self.hostname}>"

    @property
    def headers(self) -> dict[str, str]:
        return build_headers(self)

    @property
    def headers_string(self) -> str:
        return render_headers(self)

    @property
    def has_attachment(self) -> bool:
        """True when the body must be sent as multipart."""
        return bool(self.attachments) or self.alternative is not None

    @property
    def recipients(self) -> list[str]:
        """Envelope recipient addresses: to, then cc, then bcc."""
        return [user.email for user in (*self.to, *self.cc, *self.bcc)]


def _as_attachment(value: Any) -> Attachment:
    if isinstance(value, Attachment):
        return value
    return Attachment.model_validate(value)
