"""Unit tests for the SRT parser.

WHY: SRT cue scanning is shared with WebVTT, so a regression here breaks
two formats. Per-cue error recovery must skip only the broken cue.

HOW: parse_srt_segment() against hand-written cue line lists, then
parse_srt() on whole documents, with caplog for the recovered errors.
"""

import logging

import pytest

from transcript_converter.core.errors import FormatError, GrammarError
from transcript_converter.core.ir import Segment, SRTSegment
from transcript_converter.core.options import CombineOptions
from transcript_converter.formats.srt import SRTParser, is_srt, parse_srt, parse_srt_segment


class TestParseSRTSegment:
    """Single cue parsing."""

    def test_two_line_body_with_speaker(self):
        cue = parse_srt_segment([
            "1",
            "00:00:00,780 --> 00:00:06,210",
            "Adam Curry: podcasting 2.0 March",
            "4 2023 Episode 124 on D flat",
        ])

        assert cue == SRTSegment(
            index=1,
            start_time=pytest.approx(0.78),
            end_time=pytest.approx(6.21),
            speaker="Adam Curry",
            body="podcasting 2.0 March\n4 2023 Episode 124 on D flat",
        )

    def test_period_separator(self):
        cue = parse_srt_segment(["1", "00:00:00.780 --> 00:00:06.210", "Adam Curry: podcasting"])

        assert cue.start_time == pytest.approx(0.78)
        assert cue.end_time == pytest.approx(6.21)
        assert cue.body == "podcasting"

    def test_no_speaker(self):
        cue = parse_srt_segment(["7", "00:00:01,000 --> 00:00:02,000", "just words"])

        assert cue.index == 7
        assert cue.speaker == ""
        assert cue.body == "just words"

    def test_stops_at_blank_line(self):
        cue = parse_srt_segment([
            "1",
            "00:00:00,780 --> 00:00:06,210",
            "Adam Curry: podcasting",
            "",
            "2",
        ])

        assert cue.body == "podcasting"

    def test_leading_blank_lines_skipped(self):
        cue = parse_srt_segment(["", "  ", "1", "00:00:01,000 --> 00:00:02,000", "hi"])
        assert cue.index == 1

    def test_index_optional(self):
        cue = parse_srt_segment(
            ["00:00:00.000 --> 00:00:11.840", " Buenas, bienvenidas de vuelta"],
            index_optional=True,
        )

        assert cue.index == -1
        assert cue.start_time == 0
        assert cue.end_time == pytest.approx(11.84)
        assert cue.body == "Buenas, bienvenidas de vuelta"

    def test_cue_settings_ignored(self):
        cue = parse_srt_segment(
            ["00:00:01.000 --> 00:00:02.000 align:start position:10%", "hi"],
            index_optional=True,
        )
        assert cue.end_time == 2

    @pytest.mark.parametrize(
        "lines",
        [
            [],
            [""],
            ["1", "00:00:00,780 --> 00:00:06,210"],
            ["", "00:00:00,780 --> 00:00:06,210", "Adam Curry: podcasting", "more"],
            ["0", "00:00:00,780 --> 00:00:06,210", "zero index"],
            ["1", "00:00:00,780 -> 00:00:06,210", "wrong arrow"],
            ["1", "00:00:00,780 --> 00:00:06,210 --> 00:00:07,030", "two arrows"],
            ["1", "00:00:00,780 --> ", "no end"],
            ["1", "00:00:xx --> 00:00:06,210", "bad time"],
        ],
    )
    def test_invalid(self, lines):
        with pytest.raises(GrammarError):
            parse_srt_segment(lines)

    def test_input_list_untouched(self):
        lines = ["", "1", "00:00:01,000 --> 00:00:02,000", "hi"]
        parse_srt_segment(lines)
        assert lines[0] == ""


class TestIsSRT:
    """SRT sniffing on the first cue."""

    def test_detects(self, sample_srt):
        assert is_srt(sample_srt)

    def test_rejects(self):
        assert not is_srt("hello\nworld\nagain")

    def test_sniff_failure_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="transcript_converter.formats.srt"):
            is_srt("not srt at all")
        assert "Unable to parse data as SRT" in caplog.text


class TestParseSRT:
    """Whole-document parsing."""

    def test_sample(self, sample_srt):
        segments = parse_srt(sample_srt)

        assert len(segments) == 3
        assert segments[0] == Segment(
            start_time=pytest.approx(0.78),
            end_time=pytest.approx(6.21),
            speaker="Adam Curry",
            body="podcasting 2.0 March\n4 2023 Episode 124 on D flat",
        )
        assert segments[2].speaker == "Dave Jones"
        assert segments[2].body == "hello Adam"

    def test_speaker_carried_forward(self, sample_srt):
        segments = parse_srt(sample_srt)
        assert segments[1].speaker == "Adam Curry"

    def test_crlf_line_endings(self, sample_srt):
        segments = parse_srt(sample_srt.replace("\n", "\r\n"))
        assert [s.body for s in segments] == [s.body for s in parse_srt(sample_srt)]

    def test_no_trailing_blank_line(self):
        segments = parse_srt("1\n00:00:01,000 --> 00:00:02,000\nhi\n\n2\n00:00:02,000 --> 00:00:03,000\nbye")
        assert [s.body for s in segments] == ["hi", "bye"]

    def test_multiple_blank_lines(self):
        segments = parse_srt("1\n00:00:01,000 --> 00:00:02,000\nhi\n\n\n\n2\n00:00:02,000 --> 00:00:03,000\nbye\n")
        assert len(segments) == 2

    def test_broken_cue_skipped_and_logged(self, caplog):
        data = (
            "1\n00:00:01,000 --> 00:00:02,000\nhi\n"
            "\n"
            "2\n00:00:02,000 -> 00:00:03,000\nbroken\n"
            "\n"
            "3\n00:00:03,000 --> 00:00:04,000\nbye\n"
        )
        with caplog.at_level(logging.WARNING, logger="transcript_converter.formats.srt"):
            segments = parse_srt(data)

        assert [s.body for s in segments] == ["hi", "bye"]
        assert "Error parsing SRT segment lines (source line 8)" in caplog.text

    def test_broken_final_cue_logged(self, caplog):
        data = "1\n00:00:01,000 --> 00:00:02,000\nhi\n\n2\nbroken"
        with caplog.at_level(logging.WARNING, logger="transcript_converter.formats.srt"):
            segments = parse_srt(data)

        assert len(segments) == 1
        assert "Error parsing final SRT segment lines" in caplog.text

    def test_not_srt(self):
        with pytest.raises(FormatError):
            parse_srt("this is not a subtitle file")

    def test_combine_segments(self, sample_srt):
        segments = parse_srt(
            sample_srt,
            CombineOptions(combine_segments=True, combine_segments_length=128),
        )

        assert len(segments) == 2
        assert segments[0].body == (
            "podcasting 2.0 March\n4 2023 Episode 124 on D flat formable hello everybody welcome"
        )
        assert segments[0].end_time == 12

    def test_speaker_change(self, sample_srt):
        segments = parse_srt(sample_srt, CombineOptions(speaker_change=True))
        assert [s.speaker for s in segments] == ["Adam Curry", None, "Dave Jones"]


class TestSRTParser:
    """Registry wrapper."""

    def test_name(self):
        assert SRTParser().name == "SubRip (SRT)"

    def test_parse(self, sample_srt):
        parser = SRTParser()
        assert parser.detect(sample_srt)
        assert len(parser.parse(sample_srt)) == 3
