import pytest

from notelens.search.query import compile_query
from notelens.search.segmenter import match_count, number_segments, segment
from notelens.search.types import MatchSpan, Segment, TextLeaf


@pytest.mark.unit
class TestSegment:
    """Segmentation of raw editor text."""

    def test_basic_split(self):
        segments = segment("The cat sat", compile_query("cat"))
        assert segments == [Segment("The ", False), Segment("cat", True), Segment(" sat", False)]

    def test_empty_query_yields_single_segment(self):
        assert segment("whole text", compile_query("")) == [Segment("whole text", False)]

    def test_empty_content(self):
        assert segment("", compile_query("x")) == [Segment("", False)]
        assert segment("", compile_query("")) == [Segment("", False)]

    def test_no_match_yields_single_segment(self):
        assert segment("nothing here", compile_query("zzz")) == [Segment("nothing here", False)]

    def test_adjacent_matches(self):
        segments = segment("abab", compile_query("ab"))
        assert segments == [Segment("ab", True), Segment("ab", True)]

    def test_matches_at_both_ends(self):
        segments = segment("xax", compile_query("x"))
        assert [s.is_match for s in segments] == [True, False, True]

    def test_preserves_original_case(self):
        segments = segment("Hello HELLO", compile_query("hello"))
        assert [s.text for s in segments if s.is_match] == ["Hello", "HELLO"]

    def test_whole_word_context_is_respected(self):
        # The leading boundary only holds next to the preceding "a"
        content = "a x"
        matcher = compile_query(" x", whole_word=True)
        assert not matcher.fullmatch(" x")
        segments = segment(content, matcher)
        assert segments == [Segment("a", False), Segment(" x", True)]
        assert sum(s.is_match for s in segments) == match_count(content, matcher) == 1

    def test_whole_word_rejects_embedded_text(self):
        content = "a ba b"
        matcher = compile_query("a b", whole_word=True)
        assert segment(content, matcher) == [Segment(content, False)]
        assert match_count(content, matcher) == 0

    def test_unicode_text(self):
        content = "naïve café — café ☕ café"
        segments = segment(content, compile_query("café"))
        assert "".join(s.text for s in segments) == content
        assert sum(s.is_match for s in segments) == 3

    def test_multiline(self):
        content = "line one\nline two\n"
        segments = segment(content, compile_query("line"))
        assert sum(s.is_match for s in segments) == 2
        assert "".join(s.text for s in segments) == content


@pytest.mark.unit
def test_match_count_examples():
    assert match_count("Hello", compile_query("hello", case_sensitive=True)) == 0
    assert match_count("Hello", compile_query("hello")) == 1
    assert match_count("concatenate", compile_query("cat", whole_word=True)) == 0
    assert match_count("concatenate", compile_query("cat")) == 1
    assert match_count("anything", compile_query("")) == 0


@pytest.mark.unit
def test_number_segments_continues_from_start():
    nodes, cursor = number_segments("a x a", compile_query("a"), start=5)
    assert nodes == [MatchSpan("a", 5), TextLeaf(" x "), MatchSpan("a", 6)]
    assert cursor == 7


@pytest.mark.unit
def test_number_segments_without_matches():
    nodes, cursor = number_segments("plain", compile_query(""))
    assert nodes == [TextLeaf("plain")]
    assert cursor == 0
