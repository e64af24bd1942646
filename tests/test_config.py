# ABOUTME: Tests for environment-driven application configuration
# ABOUTME: Validates defaults, ALBUM_ARCHIVER_ overrides and the lazy global instance

from pathlib import Path

import pytest
from pydantic import ValidationError

from album_archiver.config import Config, get_config, reload_config


@pytest.fixture(autouse=True)
def clean_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ["FEED_URL", "MAX_SOCKETS", "SINGLE_BATCH", "DESTINATION_ROOT", "BATCH_DELAY_SECONDS"]:
        monkeypatch.delenv(f"ALBUM_ARCHIVER_{name}", raising=False)
    yield
    monkeypatch.undo()
    reload_config()


def test_defaults():
    config = Config()

    assert config.feed_url == ""
    assert config.start_cursor == ""
    assert config.single_batch is False
    assert config.max_sockets == 10
    assert config.destination_root == Path("albums")
    assert config.batch_delay_seconds == 2.0
    assert config.album_api_base == "https://api.imgur.com/3"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ALBUM_ARCHIVER_FEED_URL", "https://example.com/saved.rss")
    monkeypatch.setenv("ALBUM_ARCHIVER_MAX_SOCKETS", "4")
    monkeypatch.setenv("ALBUM_ARCHIVER_SINGLE_BATCH", "true")
    monkeypatch.setenv("ALBUM_ARCHIVER_DESTINATION_ROOT", "/srv/albums")

    config = Config()

    assert config.feed_url == "https://example.com/saved.rss"
    assert config.max_sockets == 4
    assert config.single_batch is True
    assert config.destination_root == Path("/srv/albums")


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("ALBUM_ARCHIVER_BATCH_DELAY_SECONDS=0.25\n")

    assert Config().batch_delay_seconds == 0.25


def test_rejects_empty_pool():
    with pytest.raises(ValidationError):
        Config(max_sockets=0)


def test_get_config_is_cached_until_reload(monkeypatch):
    first = reload_config()
    assert get_config() is first

    monkeypatch.setenv("ALBUM_ARCHIVER_MAX_SOCKETS", "3")
    assert get_config().max_sockets == first.max_sockets

    reloaded = reload_config()
    assert reloaded is not first
    assert get_config().max_sockets == 3
