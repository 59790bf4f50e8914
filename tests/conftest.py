import asyncio
from datetime import date

import pytest

from gameday.services import espn_common


@pytest.fixture(autouse=True)
def _no_retry_backoff(monkeypatch):
    monkeypatch.setattr(espn_common, "RETRY_BACKOFF", 0.0)


@pytest.fixture
def game_day():
    return date(2024, 10, 19)


@pytest.fixture
def run():
    return asyncio.run
