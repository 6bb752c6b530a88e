# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration for composing and sending mail.

Settings come from an INI file (default: ``config.ini``) with environment
variables as fallbacks. All variables are prefixed with ``MM_``:

  MM_CONFIG - Path to config.ini file (default: config.ini)
  MM_LOG_LEVEL - Logging level (default: INFO)
  MM_SMTP_HOST - SMTP server host (default: localhost)
  MM_SMTP_PORT - SMTP server port (default: 587)
  MM_SMTP_USER - SMTP username
  MM_SMTP_PASSWORD - SMTP password
  MM_SMTP_USE_TLS - Direct TLS connection (default: False)
  MM_SMTP_START_TLS - Upgrade with STARTTLS (default: False)
  MM_SMTP_TIMEOUT - Connection timeout in seconds (default: 10)
  MM_PRODUCT_TAG - Tag used in Message-ID and MIME-Version (default: Mail-Message)

Config file sections/keys:
  [smtp] host, port, user, password, use_tls, start_tls, timeout
  [message] product_tag
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .logger import get_logger
from .models import DEFAULT_PRODUCT_TAG, Mail

logger = get_logger("MailMessage.config")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class SmtpConfig:
    """SMTP server connection settings."""

    host: str = "localhost"
    """SMTP server hostname."""

    port: int = 587
    """SMTP server port."""

    user: str | None = None
    """Username for authentication; login is skipped when unset."""

    password: str | None = None
    """Password for authentication."""

    use_tls: bool = False
    """Connect with implicit TLS (usually port 465)."""

    start_tls: bool = False
    """Upgrade a plain connection with STARTTLS."""

    timeout: float = 10.0
    """Timeout in seconds for SMTP operations."""


@dataclass
class MailConfig:
    """Main configuration container."""

    product_tag: str = DEFAULT_PRODUCT_TAG
    """Tag stamped in Message-ID and MIME-Version headers."""

    smtp: SmtpConfig = field(default_factory=SmtpConfig)

    def new_mail(self, **fields: Any) -> Mail:
        """Build a :class:`Mail` carrying the configured product tag."""
        fields.setdefault("product_tag", self.product_tag)
        return Mail(**fields)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = str(value).strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    logger.warning("Ignoring invalid boolean value %r", value)
    return default


def load_settings(path: str | os.PathLike[str] | None = None) -> MailConfig:
    """Load configuration from an INI file with environment variables as fallbacks.

    A missing file is not an error: environment variables and defaults apply.

    Raises:
        ValueError: If a numeric option cannot be parsed.
    """
    config_path = Path(path if path is not None else os.getenv("MM_CONFIG", "config.ini"))
    parser = configparser.ConfigParser()
    if config_path.exists():
        parser.read(config_path)
    else:
        logger.debug("Config file %s not found, using environment and defaults", config_path)

    def get(section: str, option: str, env: str) -> str | None:
        if parser.has_option(section, option):
            return parser.get(section, option)
        return os.getenv(env)

    defaults = SmtpConfig()
    port = get("smtp", "port", "MM_SMTP_PORT")
    timeout = get("smtp", "timeout", "MM_SMTP_TIMEOUT")
    user = get("smtp", "user", "MM_SMTP_USER")
    password = get("smtp", "password", "MM_SMTP_PASSWORD")

    smtp = SmtpConfig(
        host=(get("smtp", "host", "MM_SMTP_HOST") or defaults.host).strip(),
        port=int(port) if port else defaults.port,
        user=(user.strip() or None) if user else None,
        password=password or None,
        use_tls=_parse_bool(get("smtp", "use_tls", "MM_SMTP_USE_TLS"), defaults.use_tls),
        start_tls=_parse_bool(get("smtp", "start_tls", "MM_SMTP_START_TLS"), defaults.start_tls),
        timeout=float(timeout) if timeout else defaults.timeout,
    )
    product_tag = (get("message", "product_tag", "MM_PRODUCT_TAG") or "").strip()
    return MailConfig(product_tag=product_tag or DEFAULT_PRODUCT_TAG, smtp=smtp)
