"""Tests for configuration constants."""

import pytest

from version_settings import config


@pytest.mark.parametrize("total, expected", [
    (16384, 4096),
    (8000, 2048),
    (3000, 768),
    (100, 128),
])
def test_suggested_memory(total, expected):
    assert config.suggested_memory(total) == expected


def test_suggested_memory_is_positive():
    assert config.SUGGESTED_MEMORY > 0
    assert config.SUGGESTED_MEMORY % config.RAM_STEP == 0
