"""Tests for configuration loading."""

import pytest

from recipe_scan.config import ImageSettings, RetrySettings, Settings


class TestRetrySettings:
    """Tests for RetrySettings defaults and environment overrides."""

    def test_defaults(self) -> None:
        cfg = RetrySettings()
        assert cfg.max_attempts == 3
        assert cfg.initial_delay == 1.5
        assert cfg.exponential_base == 2.0
        assert cfg.jitter is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "5")
        assert RetrySettings().max_attempts == 5


class TestSettings:
    """Tests for the top-level Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CONCURRENCY", raising=False)
        monkeypatch.delenv("GROUP_THRESHOLD_SECONDS", raising=False)
        cfg = Settings(_env_file=None)
        assert cfg.concurrency == 5
        assert cfg.group_threshold_seconds == 7.5
        assert cfg.text_export is False
        assert isinstance(cfg.retry, RetrySettings)
        assert isinstance(cfg.image, ImageSettings)

    def test_batch_tags_from_comma_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BATCH_TAGS", "family, winter ,")
        assert Settings(_env_file=None).batch_tags == ["family", "winter"]

    def test_batch_tags_from_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BATCH_TAGS", '["a", "b"]')
        assert Settings(_env_file=None).batch_tags == ["a", "b"]

    def test_concurrency_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            Settings(_env_file=None, concurrency=0)
