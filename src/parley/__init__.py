"""
Parley: rule-based response engine.

Knowledge base, normalizer and layered matcher, usable without any I/O:

    kb = load_knowledge_base()
    normalized = normalize("Hello, Java!")
    if not normalized.is_empty:
        reply = respond(normalized, kb)
"""

from .errors import KnowledgeBaseError, ParleyError
from .knowledge import (
    SEED_ENTRIES, KnowledgeBase, KnowledgeEntry,
    load_knowledge_base, load_knowledge_file,
)
from .matcher import FALLBACK_RESPONSE, MatchDecision, match, respond
from .normalizer import NormalizedInput, normalize
from .session import ChatSession, TurnResult, is_exit_command

__all__ = [
    'ParleyError', 'KnowledgeBaseError',
    'SEED_ENTRIES', 'KnowledgeBase', 'KnowledgeEntry',
    'load_knowledge_base', 'load_knowledge_file',
    'FALLBACK_RESPONSE', 'MatchDecision', 'match', 'respond',
    'NormalizedInput', 'normalize',
    'ChatSession', 'TurnResult', 'is_exit_command',
]
