"""
Provider contract for the LLM that writes chunked replies.

A provider takes a conversation and returns the raw reply text. That text
may still contain chunk markers; splitting it is the caller's job, so
providers never look at markers themselves.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from enum import Enum


class MessageRole(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ChatMessage:
    """One conversation turn; the system turn carries the marker instructions."""
    role: MessageRole
    content: str


@dataclass
class LLMConfig:
    """
    Settings for a reply-writing model.

    Attributes:
        model_name: Vendor model identifier
        temperature: Sampling temperature, 0.0 to 1.0
        max_tokens: Upper bound on reply length in tokens
        top_p: Nucleus sampling; only sent when not 1.0
        stop_sequences: Strings that end the reply early
        api_key: Vendor credential
        additional_params: Extra request fields passed through verbatim
    """
    model_name: str
    temperature: float = 0.7
    max_tokens: int = 1024
    top_p: float = 1.0
    stop_sequences: Optional[List[str]] = None
    api_key: Optional[str] = None
    additional_params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GenerationResult:
    """
    A reply as returned by the model, before marker splitting.

    Attributes:
        text: Reply text, markers included
        model: Model that actually answered
        finish_reason: Vendor stop reason (e.g. "end_turn", "max_tokens")
        prompt_tokens: Input token usage
        completion_tokens: Output token usage
        metadata: Vendor-specific extras such as the response id
    """
    text: str
    model: str
    finish_reason: Optional[str] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def total_tokens(self) -> Optional[int]:
        if self.prompt_tokens is None or self.completion_tokens is None:
            return None
        return self.prompt_tokens + self.completion_tokens


class LLMProvider(ABC):
    """
    Base class for reply-writing models.

    Subclasses implement ``chat`` and ``cleanup``; ``generate`` is a
    single-turn shortcut built on ``chat``. Configuration is checked once,
    at construction, through ``_validate_config``.
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._validate_config()

    @abstractmethod
    def _validate_config(self) -> None:
        """Raise ValueError if ``self.config`` cannot be used."""
        pass

    @abstractmethod
    def chat(
        self,
        messages: List[ChatMessage],
        **kwargs
    ) -> GenerationResult:
        """
        Write the next assistant turn.

        Args:
            messages: Conversation so far, system prompt first
            **kwargs: Per-call overrides such as ``temperature``

        Returns:
            The unsplit reply

        Raises:
            GenerationError: Or one of its subclasses on any vendor failure
        """
        pass

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> GenerationResult:
        """Reply to a single user prompt."""
        messages = []
        if system_prompt:
            messages.append(ChatMessage(role=MessageRole.SYSTEM, content=system_prompt))
        messages.append(ChatMessage(role=MessageRole.USER, content=prompt))
        return self.chat(messages, **kwargs)

    def get_model_info(self) -> Dict[str, Any]:
        return {
            "model_name": self.config.model_name,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "provider": self.__class__.__name__,
        }

    @abstractmethod
    def cleanup(self) -> None:
        """Release the vendor client."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()


class GenerationError(Exception):
    """The model could not produce a reply."""
    pass


class AuthenticationError(GenerationError):
    """The vendor rejected the credentials."""
    pass


class RateLimitError(GenerationError):
    """The vendor throttled the request."""
    pass


class ContextLengthExceededError(GenerationError):
    """The conversation no longer fits the model's context window."""
    pass
