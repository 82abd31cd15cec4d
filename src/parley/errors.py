"""Load-time error types."""

from __future__ import annotations


class ParleyError(Exception):
    """Base class for parley errors."""


class KnowledgeBaseError(ParleyError, ValueError):
    """Raised when a knowledge file cannot be turned into a knowledge base."""
