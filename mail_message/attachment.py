# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Attachment value objects.

An attachment is one of three variants:
- data: raw bytes held in memory
- file: a path read when the message is serialized
- html: an HTML body part, optionally flagged as the alternative rendering
  of the plain text body and carrying related parts (e.g. inline images)

Only HTML attachments can be alternatives or carry related parts.
"""

from __future__ import annotations

import mimetypes
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .headers import header_pairs

DEFAULT_MIME = "application/octet-stream"


class AttachmentKind(str, Enum):
    """Storage variant of an attachment."""

    DATA = "data"
    FILE = "file"
    HTML = "html"


def guess_mime(filename: str) -> tuple[str, str]:
    """Guess the MIME type for the given filename."""
    mt, _ = mimetypes.guess_type(filename)
    if not mt:
        return ("application", "octet-stream")
    return tuple(mt.split("/", 1))  # type: ignore[return-value]


class Attachment(BaseModel):
    """A MIME part attached to a mail.

    Attributes:
        kind: Storage variant.
        content: Bytes for data attachments, text for HTML attachments.
        path: Filesystem path for file attachments.
        mime: Content type, e.g. ``image/png``.
        name: Filename announced in Content-Disposition.
        inline: Use ``inline`` instead of ``attachment`` disposition.
        is_alternative: HTML part is the alternative rendering of the text body.
        charset: Character set of an HTML part.
        additional_headers: Extra part headers, in caller order.
        related: Parts rendered together with an HTML part (multipart/related);
            only HTML attachments may carry them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: AttachmentKind
    content: bytes | str | None = None
    path: str | None = None
    mime: str = DEFAULT_MIME
    name: str | None = None
    inline: bool = False
    is_alternative: bool = False
    charset: str = "utf-8"
    additional_headers: Annotated[
        tuple[tuple[str, str], ...],
        Field(default=(), description="Extra part headers as (name, value) pairs"),
    ]
    related: tuple[Attachment, ...] = ()

    @field_validator("additional_headers", mode="before")
    @classmethod
    def normalise_headers(cls, v: Any) -> tuple[tuple[str, str], ...]:
        return header_pairs(v)

    @model_validator(mode="after")
    def check_variant(self) -> Attachment:
        """Each variant needs its payload; only HTML parts may be alternatives or carry related parts."""
        if self.kind is AttachmentKind.DATA and not isinstance(self.content, bytes):
            raise ValueError("data attachments require bytes content")
        if self.kind is AttachmentKind.FILE and not self.path:
            raise ValueError("file attachments require a path")
        if self.kind is AttachmentKind.HTML and not isinstance(self.content, str):
            raise ValueError("html attachments require text content")
        if self.is_alternative and self.kind is not AttachmentKind.HTML:
            raise ValueError("only html attachments can be alternatives")
        if self.related and self.kind is not AttachmentKind.HTML:
            raise ValueError("only html attachments can carry related parts")
        return self

    @classmethod
    def from_html(
        cls,
        html_content: str,
        *,
        charset: str = "utf-8",
        alternative: bool = True,
        inline: bool = False,
        additional_headers: Any = (),
        related: tuple[Attachment, ...] | list[Attachment] = (),
    ) -> Attachment:
        """Build an HTML part; by default it is the alternative of the text body."""
        return cls(
            kind=AttachmentKind.HTML,
            content=html_content,
            mime="text/html",
            charset=charset,
            inline=inline,
            is_alternative=alternative,
            additional_headers=additional_headers,
            related=tuple(related),
        )

    @classmethod
    def from_data(
        cls,
        data: bytes,
        *,
        mime: str,
        name: str,
        inline: bool = False,
        additional_headers: Any = (),
    ) -> Attachment:
        """Build an attachment from in-memory bytes."""
        return cls(
            kind=AttachmentKind.DATA,
            content=data,
            mime=mime,
            name=name,
            inline=inline,
            additional_headers=additional_headers,
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        mime: str | None = None,
        name: str | None = None,
        inline: bool = False,
        additional_headers: Any = (),
    ) -> Attachment:
        """Build an attachment read from ``path`` at serialization time.

        ``mime`` is guessed from the filename and ``name`` defaults to the basename.
        """
        path_obj = Path(path)
        resolved_name = name or path_obj.name
        if mime is None:
            mime = "/".join(guess_mime(resolved_name))
        return cls(
            kind=AttachmentKind.FILE,
            path=str(path_obj),
            mime=mime,
            name=resolved_name,
            inline=inline,
            additional_headers=additional_headers,
        )

    @property
    def maintype(self) -> str:
        return self.mime.split("/", 1)[0]

    @property
    def subtype(self) -> str:
        parts = self.mime.split("/", 1)
        return parts[1] if len(parts) == 2 else "octet-stream"

    def read_bytes(self) -> bytes:
        """Return the raw payload of the attachment."""
        if self.kind is AttachmentKind.FILE:
            return Path(self.path).read_bytes()  # type: ignore[arg-type]
        if isinstance(self.content, str):
            return self.content.encode(self.charset)
        return self.content or b""

    def __repr__(self) -> str:
        return (
            f"Attachment(kind={self.kind.value!r}, mime={self.mime!r}, "
            f"name={self.name!r}, is_alternative={self.is_alternative!r})"
        )
