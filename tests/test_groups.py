"""
Group splitting and record field builders.
Run: pytest tests/test_groups.py -v
"""
import pytest

from subtitle_processor.errors import MalformedGroupError, SubtitleError
from subtitle_processor.groups import (
    build_caption_fields,
    build_subtitle_fields,
    split_into_groups,
)

SRT = (
    "1\r\n"
    "00:00:01,000 --> 00:00:02,000\r\n"
    "Hello there  \r\n"
    "你好\r\n"
    "\r\n"
    "2\r\n"
    "00:00:03,000 --> 00:00:04,000\r\n"
    "再见\r\n"
    "\r\n"
    "3\r\n"
    "00:00:05,000 --> 00:00:06,000\r\n"
    "Bye.\r\n"
    "拜拜。\r\n"
    "\r\n"
)


class TestSplit:
    def test_groups(self):
        groups = split_into_groups(SRT)
        assert groups == [
            "1\n00:00:01,000 --> 00:00:02,000\nHello there\n你好",
            "2\n00:00:03,000 --> 00:00:04,000\n再见",
            "3\n00:00:05,000 --> 00:00:06,000\nBye.\n拜拜。",
        ]

    def test_one_group_per_index_line(self):
        text = "\n\n".join(f"{i}\n00:00:0{i},000 --> 00:00:0{i},500\nline {i}" for i in range(1, 8))
        assert len(split_into_groups(text)) == 7

    def test_headerless_input_is_one_group(self):
        assert split_into_groups("just some text\nmore text\n") == ["just some text\nmore text"]

    def test_index_spaces_removed(self):
        groups = split_into_groups("1\nTS\nA\n\n 2 \nTS\nB")
        assert groups == ["1\nTS\nA", "2\nTS\nB"]

    def test_leading_blank_lines_and_bom(self):
        groups = split_into_groups("\ufeff\n\n1\nTS\nA\n")
        assert groups == ["1\nTS\nA"]

    def test_number_right_after_index_is_content(self):
        groups = split_into_groups("1\nTS\nA\n\n2\n3\nB")
        assert groups == ["1\nTS\nA", "2\n3\nB"]

    def test_lone_carriage_returns(self):
        assert split_into_groups("1\rTS\rA\r\r2\rTS\rB") == ["1\nTS\nA", "2\nTS\nB"]

    def test_empty(self):
        assert split_into_groups("") == []


class TestSubtitleFields:
    def test_single_content_line_is_secondary(self):
        assert build_subtitle_fields("2\nTS\n再见") == ("2", "TS", None, "再见")

    def test_two_content_lines(self):
        assert build_subtitle_fields("1\nTS\nHello\n你好") == ("1", "TS", "Hello", "你好")

    def test_no_content(self):
        assert build_subtitle_fields("1\nTS") == ("1", "TS", None, None)

    def test_too_many_lines(self):
        group = "4\nTS\none\ntwo\nthree"
        with pytest.raises(MalformedGroupError) as exc_info:
            build_subtitle_fields(group)
        assert exc_info.value.group == group
        assert group in str(exc_info.value)
        assert isinstance(exc_info.value, SubtitleError)


class TestCaptionFields:
    def test_lines_are_joined(self):
        assert build_caption_fields("1\nTS\nline one\nline two") == ("1", "TS", "line one line two", None)

    def test_no_content(self):
        assert build_caption_fields("1\nTS") == ("1", "TS", None, None)
