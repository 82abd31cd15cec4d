"""Keyword and phrase knowledge base."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from .errors import KnowledgeBaseError
from .normalizer import normalize

logger = logging.getLogger(__name__)


SEED_ENTRIES: Tuple[Tuple[str, str], ...] = (
    # Greetings
    ("hello", "Hello! I am a simple Java chatbot. How can I help you?"),
    ("hi", "Hi there! Feel free to ask me anything about my knowledge base."),
    ("hey", "Hey! Ready to chat? What's on your mind?"),
    # Status
    ("how are you", "I am a Java program, so I am always running perfectly! How about you?"),
    ("status", "System nominal. I am running on a JVM."),
    # Java topics
    ("java", "Java is a robust, object-oriented programming language designed for versatility."),
    ("oop", "OOP stands for Object-Oriented Programming, a paradigm based on the concept of 'objects'."),
    (
        "compiler",
        "A compiler translates your human-readable source code into machine code "
        "or bytecode (like Java's .class files).",
    ),
    ("class", "In Java, a class is a blueprint for creating objects, defining their data and behavior."),
    # General
    ("time", "I don't track the current time, but I can answer your questions about Java and development."),
    ("thank", "You're very welcome! I'm here to help."),
)


@dataclass(frozen=True)
class KnowledgeEntry:
    key: str
    response: str


def normalize_key(key: str) -> str:
    """Bring a key into the same form the matcher sees user input in."""
    return normalize(key).joined


class KnowledgeBase:
    """Read-only mapping of normalized keys to responses.

    Multi-word keys are also kept in definition order so containment
    matching always tries them in the same sequence.
    """

    def __init__(self, entries: Iterable[Tuple[str, str]]) -> None:
        table: Dict[str, str] = {}
        for raw_key, response in entries:
            key = normalize_key(raw_key)
            if not key:
                raise KnowledgeBaseError(f"knowledge key {raw_key!r} has no letters")
            if not response:
                raise KnowledgeBaseError(f"knowledge key {key!r} has an empty response")
            if key in table:
                logger.debug("duplicate knowledge key %r, keeping last definition", key)
            table[key] = response

        self._table: Mapping[str, str] = MappingProxyType(table)
        self._keys: FrozenSet[str] = frozenset(table)
        self._phrase_keys: Tuple[str, ...] = tuple(key for key in table if " " in key)

    def lookup(self, key: str) -> Optional[str]:
        return self._table.get(key)

    def keys(self) -> FrozenSet[str]:
        return self._keys

    def phrase_keys(self) -> Tuple[str, ...]:
        return self._phrase_keys

    def entries(self) -> Tuple[KnowledgeEntry, ...]:
        return tuple(KnowledgeEntry(key=key, response=response) for key, response in self._table.items())

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"KnowledgeBase(entries={len(self)}, phrases={len(self._phrase_keys)})"


def load_knowledge_base(entries: Optional[Iterable[Tuple[str, str]]] = None) -> KnowledgeBase:
    """Build a knowledge base from ``entries`` or the built-in seed list."""
    kb = KnowledgeBase(SEED_ENTRIES if entries is None else entries)
    logger.info("knowledge base loaded: %d keys, %d phrases", len(kb), len(kb.phrase_keys()))
    return kb


def load_knowledge_file(path: str | Path) -> KnowledgeBase:
    """Load a JSON array of ``{"key": ..., "response": ...}`` objects."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Knowledge file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise KnowledgeBaseError(f"{path}: invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise KnowledgeBaseError(f"{path}: expected a list of entries")

    pairs = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict) or "key" not in entry or "response" not in entry:
            raise KnowledgeBaseError(f"{path}: entry {index} needs 'key' and 'response'")
        key, response = entry["key"], entry["response"]
        if not isinstance(key, str) or not isinstance(response, str):
            raise KnowledgeBaseError(f"{path}: entry {index} 'key' and 'response' must be strings")
        pairs.append((key, response))

    logger.info("reading knowledge entries from %s", path)
    return load_knowledge_base(pairs)
