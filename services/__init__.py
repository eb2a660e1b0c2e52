"""
Services Module - Conversation services for ELIZA Responder
===========================================================

This module provides the services around the rules engine:
- Tokenizer: raw line to tokens
- Responder: tokens to a rule-driven reply
- Conversation Session: the console read/respond/print loop
"""

from .tokenizer import tokenize, detokenize
from .responder import Responder, ResponderResult, respond, is_farewell
from .session import ConversationSession

__all__ = [
    "tokenize",
    "detokenize",
    "Responder",
    "ResponderResult",
    "respond",
    "is_farewell",
    "ConversationSession",
]
