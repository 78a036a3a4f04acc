"""Unit tests for environment-provided option defaults."""

import pytest

from transcript_converter.config import SUPPORTED_EXTENSIONS, load_env_options
from transcript_converter.core.errors import ConfigurationError
from transcript_converter.core.ir import TranscriptFormat

_ENV_NAMES = [
    "TRANSCRIPT_COMBINE_EQUAL_TIMES",
    "TRANSCRIPT_COMBINE_EQUAL_TIMES_SEPARATOR",
    "TRANSCRIPT_COMBINE_SEGMENTS",
    "TRANSCRIPT_COMBINE_SEGMENTS_LENGTH",
    "TRANSCRIPT_COMBINE_SPEAKER",
    "TRANSCRIPT_SPEAKER_CHANGE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


class TestLoadEnvOptions:
    """TRANSCRIPT_* variables."""

    def test_nothing_set(self):
        assert load_env_options() == {}

    def test_booleans(self, monkeypatch):
        monkeypatch.setenv("TRANSCRIPT_COMBINE_SPEAKER", "TRUE")
        monkeypatch.setenv("TRANSCRIPT_SPEAKER_CHANGE", "no")

        assert load_env_options() == {"combine_speaker": True, "speaker_change": False}

    def test_separator_newline_escape(self, monkeypatch):
        monkeypatch.setenv("TRANSCRIPT_COMBINE_EQUAL_TIMES_SEPARATOR", "\\n--\\n")
        assert load_env_options() == {"combine_equal_times_separator": "\n--\n"}

    def test_length(self, monkeypatch):
        monkeypatch.setenv("TRANSCRIPT_COMBINE_SEGMENTS_LENGTH", " 64 ")
        assert load_env_options() == {"combine_segments_length": 64}

    def test_bad_length(self, monkeypatch):
        monkeypatch.setenv("TRANSCRIPT_COMBINE_SEGMENTS_LENGTH", "long")
        with pytest.raises(ConfigurationError):
            load_env_options()


class TestSupportedExtensions:

    def test_extensions(self):
        assert SUPPORTED_EXTENSIONS[".htm"] is TranscriptFormat.HTML
        assert set(SUPPORTED_EXTENSIONS.values()) == set(TranscriptFormat)
