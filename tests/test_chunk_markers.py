"""
Tests for the chunk marker resolver and splitter.
"""

import pytest

from src.processing.chunkers import (
    ChunkingConfig,
    DEFAULT_MARKERS,
    InvalidChunkSizeError,
    MarkerChunker,
    parse_chunk_markers,
    split_by_chunk_markers,
    strip_trailing_period
)


class TestParseChunkMarkers:
    """Tests for resolving active markers from config."""

    def test_none_config(self):
        """Test that a missing config disables chunking."""
        assert parse_chunk_markers(None) == []
        assert parse_chunk_markers() == []

    def test_disabled_config(self):
        """Test that enabled=False disables chunking even with markers."""
        assert parse_chunk_markers(ChunkingConfig(enabled=False)) == []
        config = ChunkingConfig(enabled=False, markers=["[SPLIT]"])
        assert parse_chunk_markers(config) == []

    def test_default_markers(self):
        """Test default markers when enabled without custom markers."""
        assert parse_chunk_markers(ChunkingConfig(enabled=True)) == ["[MSG]", "<nl>"]

    def test_empty_markers_fall_back_to_defaults(self):
        """Test that an empty marker list means the defaults."""
        assert parse_chunk_markers(ChunkingConfig(enabled=True, markers=[])) == list(DEFAULT_MARKERS)
        assert parse_chunk_markers(ChunkingConfig(enabled=True, markers=None)) == list(DEFAULT_MARKERS)

    def test_custom_markers(self):
        """Test that custom markers are returned verbatim, in order."""
        config = ChunkingConfig(enabled=True, markers=["[SPLIT]", "---"])
        assert parse_chunk_markers(config) == ["[SPLIT]", "---"]

    def test_duplicates_preserved(self):
        """Test that duplicate markers are not removed."""
        config = ChunkingConfig(enabled=True, markers=["|", "|"])
        assert parse_chunk_markers(config) == ["|", "|"]

    def test_returns_copy(self):
        """Test that callers cannot mutate the config through the result."""
        markers = ["[SPLIT]"]
        config = ChunkingConfig(enabled=True, markers=markers)
        result = parse_chunk_markers(config)
        result.append("extra")
        assert list(config.markers) == ["[SPLIT]"]


class TestSplitByChunkMarkers:
    """Tests for splitting text on markers."""

    def test_no_markers_in_text(self):
        """Test text without marker occurrences stays one chunk."""
        assert split_by_chunk_markers("Hello world", ["[MSG]"]) == ["Hello world"]

    def test_split_and_remove_marker(self):
        """Test splitting on a marker removes it."""
        result = split_by_chunk_markers("First part[MSG]Second part", ["[MSG]"])
        assert result == ["First part", "Second part"]

    def test_multiple_markers(self):
        """Test that any of several markers splits."""
        result = split_by_chunk_markers("One[MSG]Two<nl>Three", ["[MSG]", "<nl>"])
        assert result == ["One", "Two", "Three"]

    def test_markers_at_start_and_end(self):
        """Test boundary markers do not produce empty chunks."""
        result = split_by_chunk_markers("[MSG]Start[MSG]End[MSG]", ["[MSG]"])
        assert result == ["Start", "End"]

    def test_consecutive_markers(self):
        """Test consecutive markers never produce an empty chunk."""
        result = split_by_chunk_markers("Hello there[MSG][MSG]  [MSG]General", ["[MSG]"])
        assert result == ["Hello there", "General"]

    def test_trims_whitespace(self):
        """Test whitespace around splits is trimmed."""
        result = split_by_chunk_markers("First  [MSG]  Second  ", ["[MSG]"])
        assert result == ["First", "Second"]

    def test_trims_newlines(self):
        """Test newlines around markers are trimmed."""
        result = split_by_chunk_markers("Line one\n[MSG]\nLine two\n", ["[MSG]"])
        assert result == ["Line one", "Line two"]

    def test_merges_small_chunks(self):
        """Test small chunks merge forward with a blank line."""
        result = split_by_chunk_markers("A[MSG]B", ["[MSG]"], min_chunk_size=5)
        assert result == ["A\n\nB"]

    def test_does_not_merge_large_chunks(self):
        """Test chunks above the threshold are kept apart."""
        result = split_by_chunk_markers(
            "Long text here[MSG]Another long text",
            ["[MSG]"],
            min_chunk_size=5
        )
        assert result == ["Long text here", "Another long text"]

    def test_merge_is_forward_only(self):
        """Test a short trailing segment is emitted alone, never merged back."""
        result = split_by_chunk_markers("Hello there[MSG]k", ["[MSG]"], min_chunk_size=10)
        assert result == ["Hello there", "k"]

    def test_merge_threshold_is_exclusive(self):
        """Test a candidate exactly at the threshold is not merged."""
        # "ab\n\ncd" has length 6
        assert split_by_chunk_markers("ab[MSG]cd", ["[MSG]"], min_chunk_size=6) == ["ab", "cd"]
        assert split_by_chunk_markers("ab[MSG]cd", ["[MSG]"], min_chunk_size=7) == ["ab\n\ncd"]

    def test_merge_accumulates(self):
        """Test merging keeps accumulating while below the threshold."""
        result = split_by_chunk_markers("a[MSG]b[MSG]c[MSG]Longer tail", ["[MSG]"], min_chunk_size=8)
        assert result == ["a\n\nb\n\nc", "Longer tail"]

    def test_default_min_chunk_size(self):
        """Test the default threshold only merges degenerate fragments."""
        assert split_by_chunk_markers("A[MSG]B", ["[MSG]"]) == ["A", "B"]
        assert split_by_chunk_markers("Hi[MSG]Yo", ["[MSG]"]) == ["Hi", "Yo"]

    def test_zero_min_chunk_size(self):
        """Test a zero threshold never merges."""
        assert split_by_chunk_markers("a[MSG]b[MSG]c", ["[MSG]"], min_chunk_size=0) == ["a", "b", "c"]

    def test_strips_trailing_period(self):
        """Test each chunk loses its trailing period."""
        result = split_by_chunk_markers("Sounds good.[MSG]See you then.", ["[MSG]"])
        assert result == ["Sounds good", "See you then"]

    def test_keeps_other_punctuation(self):
        """Test question and exclamation marks are preserved."""
        result = split_by_chunk_markers("Really?[MSG]Wow!", ["[MSG]"])
        assert result == ["Really?", "Wow!"]

    def test_strips_only_one_period(self):
        """Test only the last of several trailing periods is removed."""
        result = split_by_chunk_markers("Done..[MSG]Wait...", ["[MSG]"])
        assert result == ["Done.", "Wait.."]

    def test_inner_periods_untouched(self):
        """Test periods inside a chunk are kept."""
        result = split_by_chunk_markers("Mr. Smith arrived. Then left.[MSG]Ok", ["[MSG]"])
        assert result == ["Mr. Smith arrived. Then left", "Ok"]

    def test_period_stripped_after_merge(self):
        """Test period stripping applies to the merged string only."""
        result = split_by_chunk_markers("a.[MSG]b.", ["[MSG]"], min_chunk_size=10)
        assert result == ["a.\n\nb"]

    def test_single_segment_strips_period(self):
        """Test text with no marker occurrences is trimmed and stripped."""
        assert split_by_chunk_markers("  Done.  ", ["[MSG]"]) == ["Done"]

    def test_single_segment_with_boundary_markers(self):
        """Test a single real segment between markers."""
        assert split_by_chunk_markers("[MSG] Only one. [MSG]", ["[MSG]"]) == ["Only one"]

    def test_empty_marker_list_is_noop(self):
        """Test no markers returns the text completely unmodified."""
        assert split_by_chunk_markers("  Done.  ", []) == ["  Done.  "]
        assert split_by_chunk_markers("Done.", []) == ["Done."]

    def test_empty_text(self):
        """Test empty text returns a single empty chunk."""
        assert split_by_chunk_markers("", ["[MSG]"]) == [""]
        assert split_by_chunk_markers("", []) == [""]

    def test_only_markers_and_whitespace(self):
        """Test text with nothing but markers falls back to the original."""
        text = " [MSG] \n [MSG] "
        assert split_by_chunk_markers(text, ["[MSG]"]) == [text]

    def test_regex_special_characters_are_literal(self):
        """Test markers containing regex syntax are matched literally."""
        result = split_by_chunk_markers("one.*two|three(x)", [".*", "|", "(x)"])
        assert result == ["one", "two", "three"]

    def test_dot_marker_does_not_match_any_char(self):
        """Test a '.' marker only matches literal periods."""
        result = split_by_chunk_markers("abc.def", ["."])
        assert result == ["abc", "def"]

    def test_markers_are_case_sensitive(self):
        """Test markers only match with the exact case."""
        assert split_by_chunk_markers("one[msg]two", ["[MSG]"]) == ["one[msg]two"]

    def test_empty_string_markers_ignored(self):
        """Test empty-string markers do not split every character."""
        assert split_by_chunk_markers("abc[MSG]def", ["", "[MSG]"]) == ["abc", "def"]
        assert split_by_chunk_markers("abc", [""]) == ["abc"]

    def test_overlapping_markers_use_first_alternative(self):
        """Test alternation order decides between overlapping markers."""
        assert split_by_chunk_markers("a---b", ["---", "--"]) == ["a", "b"]
        assert split_by_chunk_markers("a---b", ["--", "---"]) == ["a", "-b"]

    def test_preserves_order(self):
        """Test chunks keep the left-to-right order of the text."""
        text = "[MSG]".join(f"Message number {i}" for i in range(10))
        result = split_by_chunk_markers(text, ["[MSG]"])
        assert result == [f"Message number {i}" for i in range(10)]

    def test_accepts_tuple_markers(self):
        """Test markers may be any sequence."""
        assert split_by_chunk_markers("x<nl>y", DEFAULT_MARKERS, 0) == ["x", "y"]


class TestStripTrailingPeriod:
    """Tests for trailing period removal."""

    @pytest.mark.parametrize("text,expected", [
        ("Done.", "Done"),
        ("Done..", "Done."),
        ("Done?", "Done?"),
        ("Done!", "Done!"),
        ("Done", "Done"),
        (".", ""),
        ("", ""),
    ])
    def test_strip(self, text, expected):
        assert strip_trailing_period(text) == expected


class TestMarkerChunker:
    """Tests for the configured chunker object."""

    def test_disabled_by_default(self):
        """Test a chunker without config passes text through."""
        chunker = MarkerChunker()
        assert chunker.enabled is False
        assert chunker.markers == []
        assert chunker.split("a[MSG]b.") == ["a[MSG]b."]

    def test_enabled_split(self):
        """Test a chunker with defaults splits on both markers."""
        chunker = MarkerChunker(ChunkingConfig(enabled=True))
        assert chunker.split("Hi there.[MSG]How are you?<nl>Good") == [
            "Hi there", "How are you?", "Good"
        ]

    def test_uses_min_chunk_size(self):
        """Test the configured threshold is applied."""
        chunker = MarkerChunker(ChunkingConfig(enabled=True, min_chunk_size=5))
        assert chunker.split("A[MSG]B") == ["A\n\nB"]

    def test_negative_min_chunk_size(self):
        """Test a negative threshold is rejected."""
        with pytest.raises(InvalidChunkSizeError, match="must not be negative"):
            MarkerChunker(ChunkingConfig(enabled=True, min_chunk_size=-1))

    def test_get_strategy_info(self):
        """Test strategy metadata."""
        chunker = MarkerChunker(ChunkingConfig(enabled=True, markers=["||"], min_chunk_size=4))
        info = chunker.get_strategy_info()

        assert info == {
            "strategy": "MarkerChunker",
            "enabled": True,
            "markers": ["||"],
            "min_chunk_size": 4,
        }
