# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Constants shared by the mail_message tests."""

from datetime import datetime, timezone

FIXED_NOW = datetime(2026, 10, 19, 8, 30, 0, tzinfo=timezone.utc)
FIXED_DATE = "Mon, 19 Oct 2026 08:30:00 +0000"
