"""
Reply payloads and their marker-based splitting.

A reply payload is one outbound delivery unit. When chunking is active
each payload's text is split into several payloads, one per chunk, while
every other attribute (media, reply target, metadata) is carried over
unchanged.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence

from src.processing.chunkers import (
    ChunkingConfig,
    parse_chunk_markers,
    split_by_chunk_markers
)

logger = logging.getLogger(__name__)


@dataclass
class ReplyPayload:
    """
    A single outbound reply.

    Attributes:
        text: Message text (None for media-only replies)
        media_url: Single attached media URL
        media_urls: Multiple attached media URLs
        reply_to_id: Identifier of the message being replied to
        audio_as_voice: Deliver attached audio as a voice note
        metadata: Additional transport-specific data
    """
    text: Optional[str] = None
    media_url: Optional[str] = None
    media_urls: Optional[List[str]] = None
    reply_to_id: Optional[str] = None
    audio_as_voice: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


def split_reply_payload(
    payload: ReplyPayload,
    markers: Sequence[str],
    min_chunk_size: Optional[int] = None
) -> List[ReplyPayload]:
    """
    Split one payload into one payload per text chunk.

    Args:
        payload: Payload to split
        markers: Resolved chunk markers
        min_chunk_size: Merge threshold passed to the splitter

    Returns:
        ``[payload]`` when there is no text or no markers, otherwise a new
        payload per chunk with only ``text`` replaced
    """
    if not payload.text or not markers:
        return [payload]

    chunks = split_by_chunk_markers(payload.text, markers, min_chunk_size)
    if len(chunks) == 1 and chunks[0] == payload.text:
        return [payload]

    return [
        replace(
            payload,
            text=chunk,
            media_urls=list(payload.media_urls) if payload.media_urls is not None else None,
            metadata=dict(payload.metadata)
        )
        for chunk in chunks
    ]


def split_reply_payloads(
    payloads: Iterable[ReplyPayload],
    config: Optional[ChunkingConfig] = None
) -> List[ReplyPayload]:
    """
    Split a batch of payloads according to a chunking configuration.

    Args:
        payloads: Payloads in delivery order
        config: Chunking configuration; chunking is off when None

    Returns:
        Payloads in delivery order, each chunk in text order
    """
    payloads = list(payloads)
    markers = parse_chunk_markers(config)
    if not markers:
        return payloads

    result: List[ReplyPayload] = []
    for payload in payloads:
        result.extend(split_reply_payload(payload, markers, config.min_chunk_size))

    if len(result) != len(payloads):
        logger.info(f"Split {len(payloads)} reply payload(s) into {len(result)} messages")

    return result
