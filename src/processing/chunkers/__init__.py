"""
Reply chunking strategies.

This package resolves the active chunk markers for a configuration and
splits LLM replies into separately delivered messages.
"""

from .base import (
    ChunkingConfig,
    ChunkingError,
    InvalidChunkSizeError,
    InvalidChunkingConfigError,
    DEFAULT_MARKERS,
    DEFAULT_MIN_CHUNK_SIZE
)
from .markers import (
    MarkerChunker,
    parse_chunk_markers,
    split_by_chunk_markers,
    strip_trailing_period
)

__all__ = [
    'ChunkingConfig',
    'ChunkingError',
    'InvalidChunkSizeError',
    'InvalidChunkingConfigError',
    'DEFAULT_MARKERS',
    'DEFAULT_MIN_CHUNK_SIZE',
    'MarkerChunker',
    'parse_chunk_markers',
    'split_by_chunk_markers',
    'strip_trailing_period',
]
