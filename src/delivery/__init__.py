"""
Delivery module for outbound reply payloads.
"""

from .payloads import (
    ReplyPayload,
    split_reply_payload,
    split_reply_payloads
)

__all__ = [
    'ReplyPayload',
    'split_reply_payload',
    'split_reply_payloads'
]
