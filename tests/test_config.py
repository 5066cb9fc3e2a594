"""
Settings tests
"""

import pytest
from pydantic import ValidationError

from flowtype.config import AppSettings, appsettings


class TestDefaults:

    def test_values(self, monkeypatch):
        for name in ("TYPING_SPEED", "DISABLE_TYPING", "STREAM_CHUNK_SIZE"):
            monkeypatch.delenv(f"FLOWTYPE_{name}", raising=False)
        settings = AppSettings(_env_file=None)

        assert settings.typing_speed == 0.03
        assert settings.disable_typing is False
        assert settings.normalize_input is True
        assert settings.stream_chunk_size == 3

    def test_singleton(self):
        assert isinstance(appsettings, AppSettings)


class TestEnvironment:
    """FLOWTYPE_ prefixed variables override defaults"""

    def test_typing_speed(self, monkeypatch):
        monkeypatch.setenv("FLOWTYPE_TYPING_SPEED", "0.05")

        assert AppSettings(_env_file=None).typing_speed == 0.05

    def test_disable_typing(self, monkeypatch):
        monkeypatch.setenv("FLOWTYPE_DISABLE_TYPING", "true")

        assert AppSettings(_env_file=None).disable_typing is True

    def test_invalid_speed(self):
        with pytest.raises(ValidationError):
            AppSettings(typing_speed=0)

    def test_invalid_chunk_size(self):
        with pytest.raises(ValidationError):
            AppSettings(stream_chunk_size=0)


class TestChunks:
    """Growing prefixes for the stream replay"""

    def test_prefixes(self):
        assert AppSettings(stream_chunk_size=2).chunks_make("abcde") == ["ab", "abcd", "abcde"]

    def test_exact_multiple(self):
        assert AppSettings(stream_chunk_size=2).chunks_make("abcd") == ["ab", "abcd"]

    def test_empty(self):
        assert AppSettings().chunks_make("") == []
