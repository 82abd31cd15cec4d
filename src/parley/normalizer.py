"""Input normalization: raw text to canonical tokens."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Tuple

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_DISALLOWED = re.compile(r"[^a-z \t\n\r\f\v]")


@dataclass(frozen=True)
class NormalizedInput:
    tokens: Tuple[str, ...]
    joined: str

    @property
    def is_empty(self) -> bool:
        return not self.tokens


def normalize(raw: str) -> NormalizedInput:
    """Lowercase, drop everything but letters and whitespace, then tokenize.

    Removed characters are not replaced by a separator, so ``"don't"``
    becomes the single token ``"dont"``.
    """
    cleaned = _DISALLOWED.sub("", raw.translate(_ASCII_LOWER))
    tokens = tuple(token for token in cleaned.split() if token)
    return NormalizedInput(tokens=tokens, joined=" ".join(tokens))
