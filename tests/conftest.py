from __future__ import annotations

import pytest

from malstream.config import Config


@pytest.fixture
def config() -> Config:
    return Config(username="testuser", scroll_speed=60)
