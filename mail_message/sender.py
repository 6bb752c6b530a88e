# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Single-shot SMTP delivery of a :class:`~mail_message.models.Mail`.

Each call to :meth:`SmtpMailSender.send` opens a connection, submits one
message and closes the connection again. BCC recipients only reach the SMTP
envelope; they never appear in the serialized headers.
"""

from __future__ import annotations

import asyncio
import logging

import aiosmtplib

from .config import SmtpConfig
from .headers import HeaderBuilder
from .logger import get_logger
from .mime import as_bytes, build_mime
from .models import Mail


class SmtpMailSender:
    """Send mails through one SMTP server."""

    def __init__(
        self,
        config: SmtpConfig,
        *,
        header_builder: HeaderBuilder | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config
        self.header_builder = header_builder or HeaderBuilder()
        self.logger = logger or get_logger("MailMessage.sender")

    async def _connect(self) -> aiosmtplib.SMTP:
        """Open a new SMTP connection and authenticate if needed."""
        cfg = self.config
        smtp = aiosmtplib.SMTP(
            hostname=cfg.host,
            port=cfg.port,
            use_tls=cfg.use_tls,
            start_tls=cfg.start_tls,
            timeout=cfg.timeout,
        )

        async def _do_connect():
            await smtp.connect()
            if cfg.user and cfg.password:
                await smtp.login(cfg.user, cfg.password)

        try:
            await asyncio.wait_for(_do_connect(), timeout=cfg.timeout + 5.0)
        except BaseException:
            # Login failures and timeouts must not leave the socket open.
            smtp.close()
            raise
        return smtp

    async def send(self, mail: Mail) -> str:
        """Deliver ``mail`` and return its Message-ID.

        Raises:
            ValueError: If the mail has no envelope recipient.
            InvalidSenderAddressError: If the sender address has no domain.
            aiosmtplib.SMTPException: On SMTP level failures.
        """
        recipients = mail.recipients
        if not recipients:
            raise ValueError("Mail has no recipients")

        message_id = mail.message_id
        payload = as_bytes(build_mime(mail, builder=self.header_builder))

        smtp = await self._connect()
        try:
            await smtp.sendmail(mail.from_.email, recipients, payload)
        except Exception as exc:
            self.logger.warning("Failed to send %s via %s:%s: %s", message_id, self.config.host, self.config.port, exc)
            raise
        finally:
            try:
                await smtp.quit()
            except aiosmtplib.SMTPException as exc:
                self.logger.debug("Error closing SMTP connection: %s", exc)

        self.logger.info("Sent %s to %d recipient(s)", message_id, len(recipients))
        return message_id
