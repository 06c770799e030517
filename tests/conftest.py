"""Shared fixtures for parcel tests."""

import os
from datetime import datetime

import pytest
from dateutil import tz
from loguru import logger

from parcel.tracking.normalizer import DateNormalizer


def _frozen_at(*args):
    now = datetime(*args, tzinfo=tz.UTC)
    return lambda: now


@pytest.fixture
def fixed_clock():
    """Factory for clocks frozen at a UTC date and time."""
    return _frozen_at


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop loguru sinks added by a test so they don't outlive it."""
    yield
    logger.remove()


@pytest.fixture
def normalizer():
    """UTC normalizer with the clock at 2023-10-01 12:00."""
    return DateNormalizer(tz.UTC, clock=_frozen_at(2023, 10, 1, 12, 0))


@pytest.fixture
def widget_html():
    """Tracking widget with a delivered block and two update rows."""
    return b"""<!DOCTYPE html>
<html>
<head><title>Package tracking</title></head>
<body>
<div class="b_pkgTrk">
  <div class="b_focusTextSmall">Delivered: Mon, Sep 18, 2:30 PM</div>
  <div class="b_secondaryText">Your package was delivered</div>
  <table>
    <tr><th>Date</th><th>Time</th><th>Location</th><th>Status</th></tr>
    <tr>
      <td>Sep 18</td>
      <td>2:30 PM</td>
      <td>Brooklyn, NY</td>
      <td>Delivered</td>
    </tr>
    <tr>
      <td>Sep 17</td>
      <td>&nbsp;</td>
      <td>Queens, NY</td>
      <td>Out for Delivery</td>
    </tr>
  </table>
</div>
</body>
</html>
"""


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without ambient parcel settings or env files.

    dotenv writes straight into os.environ, so the test gets its own copy.
    """
    environ = os.environ.copy()
    for name in ["PARCEL_TZ", "PARCEL_URL", "PARCEL_USER_AGENT", "PARCEL_TIMEOUT",
                 "PARCEL_FORMAT", "LOG_LEVEL", "LOG_FILE"]:
        environ.pop(name, None)
    monkeypatch.setattr(os, "environ", environ)
    monkeypatch.chdir(tmp_path)
    return tmp_path
