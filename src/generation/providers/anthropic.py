"""
Anthropic (Claude) LLM provider implementation.

This module provides a concrete implementation of the LLMProvider
interface using Anthropic's Messages API.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from anthropic import Anthropic
from anthropic import RateLimitError as AnthropicRateLimitError
from anthropic import APIError, AuthenticationError as AnthropicAuthError

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

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProvider):
    """
    LLM provider using Anthropic's Claude models.

    Example:
        >>> config = LLMConfig(
        ...     model_name="claude-sonnet-4-5-20250929",
        ...     api_key="sk-ant-..."
        ... )
        >>> with AnthropicProvider(config) as provider:
        ...     result = provider.generate("Tell me a story", system_prompt="Be brief")
        >>> print(result.text)
    """

    MODEL_CONTEXT_WINDOWS = {
        "claude-sonnet-4-5-20250929": 200000,
        "claude-3-5-sonnet-20241022": 200000,
        "claude-3-5-haiku-20241022": 200000,
        "claude-3-opus-20240229": 200000,
        "claude-3-haiku-20240307": 200000,
    }

    def __init__(self, config: LLMConfig):
        """
        Initialize the Anthropic provider.

        Args:
            config: LLM configuration with api_key required
        """
        super().__init__(config)
        self._client: Optional[Anthropic] = None

    def _validate_config(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.config.model_name:
            raise ValueError("model_name is required")

        if not self.config.api_key:
            raise ValueError("api_key is required for Anthropic provider")

        if self.config.temperature < 0 or self.config.temperature > 1:
            raise ValueError("temperature must be between 0 and 1")

        if self.config.max_tokens <= 0:
            raise ValueError("max_tokens must be positive")

        if self.config.model_name not in self.MODEL_CONTEXT_WINDOWS:
            logger.warning(f"Unknown model {self.config.model_name}")

    def _initialize_client(self) -> None:
        """Initialize the Anthropic client if not already initialized."""
        if self._client is None:
            logger.info(f"Initializing Anthropic client for model: {self.config.model_name}")
            self._client = Anthropic(api_key=self.config.api_key)

    def _format_messages(
        self,
        messages: List[ChatMessage]
    ) -> Tuple[Optional[str], List[Dict[str, str]]]:
        """
        Split messages into Anthropic's separate system prompt and turns.

        Multiple system messages are joined with a blank line.
        """
        system_parts = []
        api_messages = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_parts.append(msg.content)
            else:
                api_messages.append({"role": msg.role.value, "content": msg.content})

        system_message = "\n\n".join(system_parts) if system_parts else None
        return system_message, api_messages

    def _build_params(self, messages: List[ChatMessage], **kwargs) -> Dict[str, Any]:
        system_message, api_messages = self._format_messages(messages)

        api_params: Dict[str, Any] = {
            "model": self.config.model_name,
            "messages": api_messages,
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
            "temperature": kwargs.get("temperature", self.config.temperature),
        }

        if system_message:
            api_params["system"] = system_message

        if self.config.top_p != 1.0:
            api_params["top_p"] = self.config.top_p

        if self.config.stop_sequences:
            api_params["stop_sequences"] = self.config.stop_sequences

        api_params.update(self.config.additional_params)
        return api_params

    def chat(self, messages: List[ChatMessage], **kwargs) -> GenerationResult:
        """
        Generate a reply to a conversation.

        Args:
            messages: List of ChatMessage objects
            **kwargs: ``max_tokens``/``temperature`` overrides

        Returns:
            GenerationResult with the reply text and token usage

        Raises:
            AuthenticationError: If authentication fails
            RateLimitError: If rate limit is exceeded
            ContextLengthExceededError: If the conversation is too long
            GenerationError: For any other API failure
        """
        self._initialize_client()
        api_params = self._build_params(messages, **kwargs)

        try:
            logger.debug(f"Calling Anthropic API with {len(api_params['messages'])} messages")
            response = self._client.messages.create(**api_params)
        except AnthropicAuthError as e:
            raise AuthenticationError(f"Authentication failed: {str(e)}") from e
        except AnthropicRateLimitError as e:
            raise RateLimitError(f"Rate limit exceeded: {str(e)}") from e
        except APIError as e:
            error_msg = str(e).lower()
            if "context" in error_msg and "length" in error_msg:
                raise ContextLengthExceededError(f"Context too long: {str(e)}") from e
            raise GenerationError(f"API error: {str(e)}") from e

        # Tool-use blocks carry no text
        text = "".join(
            block.text for block in response.content if block.type == "text"
        )

        result = GenerationResult(
            text=text,
            model=response.model,
            finish_reason=response.stop_reason,
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
            metadata={"response_id": response.id}
        )

        logger.info(
            f"Generated {result.completion_tokens} tokens "
            f"(total: {result.total_tokens})"
        )
        return result

    def get_model_info(self) -> Dict[str, Any]:
        info = super().get_model_info()
        info["provider"] = "Anthropic"
        info["context_window"] = self.MODEL_CONTEXT_WINDOWS.get(self.config.model_name, 200000)
        return info

    def cleanup(self) -> None:
        """Drop the client; the SDK needs no explicit close."""
        if self._client is not None:
            logger.info(f"Closing Anthropic client for {self.config.model_name}")
            self._client = None

    def __enter__(self):
        """Context manager entry: connect eagerly."""
        self._initialize_client()
        return self
