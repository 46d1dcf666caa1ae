"""Shared fixtures for wren tests."""

import logging

import pytest


@pytest.fixture
def wren_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """caplog scoped to the ``wren.server`` logger at DEBUG."""
    caplog.set_level(logging.DEBUG, logger="wren.server")
    return caplog
