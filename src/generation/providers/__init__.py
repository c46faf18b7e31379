"""
LLM provider implementations.
"""

from .base import (
    LLMProvider,
    LLMConfig,
    ChatMessage,
    MessageRole,
    GenerationResult,
    GenerationError,
    AuthenticationError,
    RateLimitError,
    ContextLengthExceededError
)
from .anthropic import AnthropicProvider

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
    'AnthropicProvider'
]
