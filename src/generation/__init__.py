"""
Generation module for LLM-written, marker-chunked replies.

This module provides the LLM provider interfaces, the system prompt
builder that advertises chunk markers, and the chunked reply generator.
"""

from .providers import (
    LLMProvider,
    LLMConfig,
    ChatMessage,
    MessageRole,
    GenerationResult,
    GenerationError,
    AuthenticationError,
    RateLimitError,
    ContextLengthExceededError,
    AnthropicProvider
)
from .prompts import build_chunking_instructions, build_system_prompt
from .reply_generator import ChunkedReplyGenerator, DEFAULT_SYSTEM_PROMPT

__all__ = [
    'LLMProvider',
    'LLMConfig',
    'ChatMessage',
    'MessageRole',
    'GenerationResult',
    'GenerationError',
    'AuthenticationError',
    'RateLimitError',
    'ContextLengthExceededError',
    'AnthropicProvider',
    'build_chunking_instructions',
    'build_system_prompt',
    'ChunkedReplyGenerator',
    'DEFAULT_SYSTEM_PROMPT'
]
