"""
System prompt assembly for chunked replies.

When chunking is enabled the LLM is told which literal markers it may
write to break its reply into several messages. When it is disabled the
prompt is left untouched so the model never emits markers that would be
delivered verbatim.
"""

from typing import Optional, Sequence

from src.processing.chunkers import ChunkingConfig, parse_chunk_markers


def build_chunking_instructions(markers: Sequence[str]) -> str:
    """
    Describe the active markers to the LLM.

    Args:
        markers: Resolved chunk markers

    Returns:
        Instruction paragraph, or an empty string when there are no markers
    """
    markers = [marker for marker in markers if marker]
    if not markers:
        return ""

    primary = markers[0]
    lines = [
        "## Message splitting",
        f"You may split your reply into several separate chat messages by writing "
        f"{primary} where one message should end and the next begin.",
    ]
    if len(markers) > 1:
        alternatives = ", ".join(markers[1:])
        lines.append(f"{alternatives} works the same way.")
    lines.append(
        "Split only where a person texting would naturally send a new message. "
        "Short replies should stay a single message. "
        "Never explain or mention the marker itself."
    )
    return "\n".join(lines)


def build_system_prompt(
    base_prompt: str,
    chunking_config: Optional[ChunkingConfig] = None
) -> str:
    """
    Append marker instructions to a system prompt when chunking is on.

    Args:
        base_prompt: System prompt without chunking instructions
        chunking_config: Chunking configuration (None means off)

    Returns:
        The combined prompt, or ``base_prompt`` unchanged
    """
    instructions = build_chunking_instructions(parse_chunk_markers(chunking_config))
    if not instructions:
        return base_prompt
    if not base_prompt:
        return instructions
    return f"{base_prompt.rstrip()}\n\n{instructions}"
