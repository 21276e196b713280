"""Conversation store for pipechat.

Holds the in-memory, per-process chat history.
"""

from .models import SEED_HEADER, Conversation, PendingRequest, seed_message

__all__ = [
    "SEED_HEADER",
    "Conversation",
    "PendingRequest",
    "seed_message",
]
