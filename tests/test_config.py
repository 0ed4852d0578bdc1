"""Tests for configuration validation."""

import pytest

from roomquest.config import Config


def test_defaults_validate():
    Config.validate()
    assert "Rooms Dir Prefix" in Config.display()


def test_prefix_with_separator_rejected(monkeypatch):
    monkeypatch.setattr(Config, "ROOMS_DIR_PREFIX", "nested/rooms.")
    with pytest.raises(ValueError):
        Config.validate()


def test_non_positive_draw_budget_rejected(monkeypatch):
    monkeypatch.setattr(Config, "GENERATION_MAX_DRAWS", 0)
    with pytest.raises(ValueError):
        Config.validate()
