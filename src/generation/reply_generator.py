"""
Generation of chunked chat replies.

Chains the prompt builder, an LLM provider and the payload splitter:
the LLM is told about the active markers, writes its reply, and the reply
is split into one payload per message.
"""

import logging
from typing import List, Optional

from src.delivery import ReplyPayload, split_reply_payloads
from src.processing.chunkers import ChunkingConfig

from .prompts import build_system_prompt
from .providers import ChatMessage, LLMProvider, MessageRole

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly assistant chatting over a messaging app. "
    "Keep a casual, conversational tone."
)


class ChunkedReplyGenerator:
    """
    Generate replies and split them into separately delivered messages.

    Example:
        >>> generator = ChunkedReplyGenerator(
        ...     provider,
        ...     chunking_config=ChunkingConfig(enabled=True)
        ... )
        >>> for payload in generator.reply("How was your weekend?"):
        ...     send(payload)
    """

    def __init__(
        self,
        provider: LLMProvider,
        chunking_config: Optional[ChunkingConfig] = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT
    ):
        """
        Initialize the generator.

        Args:
            provider: LLM provider used to write replies
            chunking_config: Chunking configuration (None disables splitting)
            system_prompt: Base system prompt before marker instructions
        """
        self.provider = provider
        self.chunking_config = chunking_config
        self.system_prompt = build_system_prompt(system_prompt, chunking_config)

    def build_messages(
        self,
        message: str,
        history: Optional[List[ChatMessage]] = None
    ) -> List[ChatMessage]:
        """Assemble system prompt, prior turns and the new user message."""
        messages = [ChatMessage(role=MessageRole.SYSTEM, content=self.system_prompt)]
        if history:
            messages.extend(history)
        messages.append(ChatMessage(role=MessageRole.USER, content=message))
        return messages

    def reply(
        self,
        message: str,
        history: Optional[List[ChatMessage]] = None,
        reply_to_id: Optional[str] = None,
        **kwargs
    ) -> List[ReplyPayload]:
        """
        Generate a reply to a user message.

        Args:
            message: Incoming user message
            history: Prior conversation turns
            reply_to_id: Identifier of the message being answered
            **kwargs: Generation parameters passed to the provider

        Returns:
            Reply payloads in delivery order

        Raises:
            GenerationError: If the provider fails
        """
        result = self.provider.chat(self.build_messages(message, history), **kwargs)

        payload = ReplyPayload(
            text=result.text,
            reply_to_id=reply_to_id,
            metadata={
                "model": result.model,
                "finish_reason": result.finish_reason,
                "total_tokens": result.total_tokens,
            }
        )

        payloads = split_reply_payloads([payload], self.chunking_config)
        logger.debug(f"Reply produced {len(payloads)} message(s)")
        return payloads
