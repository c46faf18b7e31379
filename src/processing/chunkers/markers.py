"""
Marker-based chunking of LLM replies.

The LLM is told (see ``src.generation.prompts``) that it may write a
marker such as ``[MSG]`` wherever its reply should break into a separate
message. This module resolves which markers are active for a given
configuration and splits replies on them.

Both functions are pure: they never raise and never mutate their inputs.
When chunking is off the text passes through completely unmodified.
"""

import re
from typing import Any, Dict, List, Optional, Sequence

from .base import (
    ChunkingConfig,
    DEFAULT_MARKERS,
    DEFAULT_MIN_CHUNK_SIZE,
    InvalidChunkSizeError
)


def parse_chunk_markers(config: Optional[ChunkingConfig] = None) -> List[str]:
    """
    Resolve the markers to recognize for a chunking configuration.

    Args:
        config: Chunking configuration, or None when none is set

    Returns:
        The configured markers in order, the default markers when none are
        configured, or an empty list when chunking is disabled
    """
    if config is None or not config.enabled:
        return []
    if config.markers:
        return list(config.markers)
    return list(DEFAULT_MARKERS)


def strip_trailing_period(text: str) -> str:
    """
    Strip a single trailing period for a casual texting style.

    Other trailing punctuation (``?``, ``!``, ...) is left alone.
    """
    if text.endswith("."):
        return text[:-1]
    return text


def _build_marker_pattern(markers: Sequence[str]) -> Optional["re.Pattern[str]"]:
    # Markers are literal text, never regex syntax.
    escaped = [re.escape(marker) for marker in markers if marker]
    if not escaped:
        return None
    return re.compile("(?:" + "|".join(escaped) + ")")


def split_by_chunk_markers(
    text: str,
    markers: Sequence[str],
    min_chunk_size: Optional[int] = None
) -> List[str]:
    """
    Split text into message chunks at every marker occurrence.

    Segments are trimmed and empty ones dropped. Adjacent segments are
    merged (joined by a blank line) while the merged text stays shorter
    than ``min_chunk_size``; merging only ever runs forward. Each emitted
    chunk loses one trailing period.

    Args:
        text: Raw reply text
        markers: Resolved markers (see ``parse_chunk_markers``)
        min_chunk_size: Merge threshold in characters; defaults to
            ``DEFAULT_MIN_CHUNK_SIZE``

    Returns:
        Ordered, non-empty list of chunks. ``[text]`` unchanged when there
        is nothing to split on or nothing left after trimming.

    Example:
        >>> split_by_chunk_markers("One[MSG]Two<nl>Three", ["[MSG]", "<nl>"])
        ['One', 'Two', 'Three']
    """
    if not text or not markers:
        return [text]

    pattern = _build_marker_pattern(markers)
    if pattern is None:
        return [text]

    if min_chunk_size is None:
        min_chunk_size = DEFAULT_MIN_CHUNK_SIZE

    parts = [part.strip() for part in pattern.split(text)]
    non_empty = [part for part in parts if part]

    if not non_empty:
        return [text]
    if len(non_empty) == 1:
        return [strip_trailing_period(non_empty[0])]

    merged = []
    current = ""

    for part in non_empty:
        candidate = f"{current}\n\n{part}" if current else part

        if current and len(candidate) < min_chunk_size:
            current = candidate
        else:
            if current:
                merged.append(strip_trailing_period(current))
            current = part

    if current:
        merged.append(strip_trailing_period(current))

    return merged if merged else [text]


class MarkerChunker:
    """
    Chunking strategy bound to a single ``ChunkingConfig``.

    Example:
        >>> chunker = MarkerChunker(ChunkingConfig(enabled=True))
        >>> chunker.split("Hi there.[MSG]How are you?")
        ['Hi there', 'How are you?']
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        """
        Initialize the chunker.

        Args:
            config: Chunking configuration (disabled when omitted)
        """
        self.config = config or ChunkingConfig()
        self._validate_config()
        self._markers = parse_chunk_markers(self.config)

    def _validate_config(self) -> None:
        """
        Validate the configuration.

        Raises:
            InvalidChunkSizeError: If min_chunk_size is negative
        """
        if self.config.min_chunk_size < 0:
            raise InvalidChunkSizeError("min_chunk_size must not be negative")

    @property
    def enabled(self) -> bool:
        return bool(self._markers)

    @property
    def markers(self) -> List[str]:
        return list(self._markers)

    def split(self, text: str) -> List[str]:
        """Split text using the configured markers and threshold."""
        return split_by_chunk_markers(
            text,
            self._markers,
            self.config.min_chunk_size
        )

    def get_strategy_info(self) -> Dict[str, Any]:
        """
        Get information about the chunking strategy.

        Returns:
            Dictionary with strategy metadata
        """
        return {
            "strategy": self.__class__.__name__,
            "enabled": self.enabled,
            "markers": self.markers,
            "min_chunk_size": self.config.min_chunk_size,
        }
