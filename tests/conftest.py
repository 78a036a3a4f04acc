"""Shared test fixtures for the transcript_converter test suite.

WHY: Several test modules parse the same small transcripts in different
formats. Centralizing them here keeps the expected speakers, times and
bodies in one place.

HOW: Plain module-level strings wrapped in fixtures, plus an autouse
fixture that puts the process-wide Options and timestamp formatter back
to their defaults after every test.

RULES:
- Every sample has two speakers, Adam Curry and Dave Jones
- Tests that touch Options or timestamp_formatter need no cleanup of
  their own
"""

from typing import List

import pytest

from transcript_converter.core.ir import Segment
from transcript_converter.core.options import Options
from transcript_converter.core.timestamp import timestamp_formatter


SAMPLE_SRT = """1
00:00:00,780 --> 00:00:06,210
Adam Curry: podcasting 2.0 March
4 2023 Episode 124 on D flat

2
00:00:06,210 --> 00:00:12,000
formable hello everybody welcome

3
00:00:12,000 --> 00:00:15,500
Dave Jones: hello Adam

"""

SAMPLE_VTT = """WEBVTT

00:00:00.000 --> 00:00:02.500
<v Adam Curry>Hello and welcome

2
00:00:02.500 --> 00:00:05.000 align:start
<v Dave Jones>Thanks Adam

00:00:05.000 --> 00:00:07.000
Glad to be here
"""

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head><title>Episode 1</title></head>
<body>
<cite>Adam Curry:</cite>
<time>0:00</time>
<p>Hello and welcome.</p>
<cite>Dave Jones:</cite>
<time>0:05</time>
<p>Thanks <b>Adam</b>.</p>
<cite></cite>
<time>1:02</time>
<p>Glad to be here.</p>
</body>
</html>
"""

SAMPLE_JSON_TRANSCRIPT = """{
    "version": "1.0.0",
    "segments": [
        {"speaker": "Adam Curry", "startTime": 0.5, "endTime": 2.0, "body": "Hello"},
        {"speaker": "Dave Jones", "startTime": 2.0, "endTime": 3.5, "body": "Hi Adam"},
        {"startTime": 3.5, "endTime": 4.0, "body": "Welcome"}
    ]
}"""

SAMPLE_JSON_SUBTITLES = """[
    {"start": 0, "end": 1500, "text": "Adam Curry: Hello there"},
    {"start": "1500", "end": "3000", "text": "still me"},
    {"start": 3000, "end": 4250, "text": "Dave Jones: Hi"}
]"""


@pytest.fixture(autouse=True)
def reset_global_state():
    """Restore the Options singleton and the timestamp formatter."""
    Options.restore_default_settings()
    timestamp_formatter.unregister_custom_formatter()
    yield
    Options.restore_default_settings()
    timestamp_formatter.unregister_custom_formatter()


@pytest.fixture
def sample_srt() -> str:
    return SAMPLE_SRT


@pytest.fixture
def sample_vtt() -> str:
    return SAMPLE_VTT


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def sample_json_transcript() -> str:
    return SAMPLE_JSON_TRANSCRIPT


@pytest.fixture
def sample_json_subtitles() -> str:
    return SAMPLE_JSON_SUBTITLES


@pytest.fixture
def single_word_segments() -> List[Segment]:
    """Word-level transcript: one segment per spoken word."""
    words = [
        ("Travis", 0.30, 0.93, "Hey,"),
        ("Travis", 0.93, 1.08, "Travis"),
        ("Travis", 1.08, 1.65, "Albritain"),
        ("Travis", 1.65, 1.90, "here."),
        ("Kevin", 2.00, 2.40, "Hi"),
        ("Kevin", 2.40, 2.80, "there!"),
    ]
    return [
        Segment(start_time=start, end_time=end, speaker=speaker, body=body)
        for speaker, start, end, body in words
    ]
