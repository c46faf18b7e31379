"""
Processing module for splitting LLM replies into messages.

This module provides the chunk-marker resolver and splitter plus the
loaders that turn external configuration into a ``ChunkingConfig``.
"""

from .chunkers import (
    ChunkingConfig,
    ChunkingError,
    InvalidChunkSizeError,
    InvalidChunkingConfigError,
    DEFAULT_MARKERS,
    DEFAULT_MIN_CHUNK_SIZE,
    MarkerChunker,
    parse_chunk_markers,
    split_by_chunk_markers
)
from .config_loader import (
    load_chunking_config,
    load_chunking_config_from_yaml,
    load_chunking_config_from_env
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
    'load_chunking_config',
    'load_chunking_config_from_yaml',
    'load_chunking_config_from_env'
]
