"""
Base types for reply chunking.

This module defines the configuration record shared by the marker
resolver, the chunk splitter and their collaborators (prompt builder,
delivery pipeline), together with the package's exception hierarchy.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple


# Canonical markers advertised to the LLM when no custom markers are set.
DEFAULT_MARKERS: Tuple[str, ...] = ("[MSG]", "<nl>")

# Kept very low on purpose: the LLM decides where to split, this only
# prevents degenerate one-character fragments.
DEFAULT_MIN_CHUNK_SIZE = 3


@dataclass(frozen=True)
class ChunkingConfig:
    """
    Configuration for marker-based reply chunking.

    Attributes:
        enabled: Whether chunking is active at all
        markers: Literal marker strings that split a reply into messages
        min_chunk_size: Chunks shorter than this (in characters) are merged
            forward into the next one
    """
    enabled: bool = False
    markers: Sequence[str] = DEFAULT_MARKERS
    min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE


class ChunkingError(Exception):
    """Base exception for chunking errors."""
    pass


class InvalidChunkSizeError(ChunkingError):
    """Raised when chunk size configuration is invalid."""
    pass


class InvalidChunkingConfigError(ChunkingError):
    """Raised when an external chunking configuration cannot be loaded."""
    pass
