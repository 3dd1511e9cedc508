"""Tests for URL list loading and configuration checks."""
import pytest

from src.config import Config, load_urls
from src.errors import ConfigLoadFailure


def test_load_urls(tmp_path):
    """Order is preserved and whitespace trimmed."""
    path = tmp_path / "urls.json"
    path.write_text('["https://b.example/", " https://a.example/ "]')
    assert load_urls(path) == ["https://b.example/", "https://a.example/"]


def test_load_urls_missing_file(tmp_path):
    """Unreadable file is fatal."""
    with pytest.raises(ConfigLoadFailure, match="Cannot read"):
        load_urls(tmp_path / "nope.json")


@pytest.mark.parametrize(
    "content, message",
    [
        ("not json", "not valid JSON"),
        ('{"url": "https://example.com/"}', "JSON array"),
        ("[]", "empty"),
        ('["https://example.com/", 42]', "invalid entries"),
        ('["https://example.com/", ""]', "invalid entries"),
        ('["https://a.b/", "https://a-b/"]', "same storage key"),
    ],
)
def test_load_urls_rejects_bad_content(tmp_path, content, message):
    """Malformed URL lists raise ConfigLoadFailure."""
    path = tmp_path / "urls.json"
    path.write_text(content)
    with pytest.raises(ConfigLoadFailure, match=message):
        load_urls(path)


def test_validate_rejects_bad_run_count(monkeypatch):
    """RUN_COUNT below 1 is a configuration error."""
    monkeypatch.setattr(Config, "RUN_COUNT", 0)
    with pytest.raises(ValueError, match="RUN_COUNT"):
        Config.validate()


def test_validate_rejects_unknown_store(monkeypatch):
    """Only files and sqlite backends exist."""
    monkeypatch.setattr(Config, "STORE_BACKEND", "s3")
    with pytest.raises(ValueError, match="STORE_BACKEND"):
        Config.validate()


def test_validate_rejects_unknown_log_level(monkeypatch):
    """LOG_LEVEL must name a logging level."""
    monkeypatch.setattr(Config, "LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="LOG_LEVEL"):
        Config.validate()


def test_validate_accepts_lowercase_log_level(monkeypatch):
    """Level names are case-insensitive."""
    monkeypatch.setattr(Config, "LOG_LEVEL", "debug")
    Config.validate()
