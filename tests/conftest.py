# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for mail_message tests."""

import pytest

from mail_message.attachment import Attachment
from mail_message.headers import HeaderBuilder
from mail_message.models import User
from tests.helpers import FIXED_NOW


@pytest.fixture
def sender():
    return User(name="Dr. Light", email="light@example.com")


@pytest.fixture
def megaman():
    return User(name="Megaman", email="megaman@example.com")


@pytest.fixture
def roll():
    return User(name="Roll", email="roll@juno.example")


@pytest.fixture
def builder():
    """Header builder with a frozen clock."""
    return HeaderBuilder(clock=lambda: FIXED_NOW)


@pytest.fixture
def png():
    return Attachment.from_data(b"\x89PNG\r\n", mime="image/png", name="x.png")
