"""Shared pytest fixtures for payment popup tests."""

from __future__ import annotations

from typing import Any, Iterator

import pytest

from tappop import env
from tappop.rendering.renderer import OutputRenderer

from tests.helpers.markup import TEST_CDN_URL


@pytest.fixture
def valid_transaction() -> dict[str, Any]:
    """Minimal transaction that passes every rule."""
    return {
        "apiKey": "K1",
        "amount": 5000,
        "email": "a@b.com",
        "env": "sandbox",
    }


@pytest.fixture
def saved_card_transaction(valid_transaction: dict[str, Any]) -> dict[str, Any]:
    """Transaction that saves payment details, with all dependent fields set."""
    return {
        **valid_transaction,
        "savePaymentDetails": True,
        "customerReference": "CUST-42",
        "phone": "08012345678",
    }


@pytest.fixture
def renderer() -> OutputRenderer:
    """Renderer pinned to a test SDK location."""
    return OutputRenderer(cdn_url=TEST_CDN_URL, button_id_prefix="tap-pay-btn-")


@pytest.fixture(autouse=True)
def reset_default_cdn_url() -> Iterator[None]:
    """Keep the process-wide SDK location from leaking between tests."""
    original = env._default_cdn_url
    yield
    env._default_cdn_url = original
