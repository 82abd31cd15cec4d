"""Decision log schema enforcement."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jsonschema import Draft7Validator

from .matcher import RULES

DECISION_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": [
        "turn_id",
        "received_at",
        "session_id",
        "rule",
        "matched_key",
        "token_count",
        "latency_ms",
    ],
    "properties": {
        "turn_id": {"type": "integer", "minimum": 1},
        "received_at": {"type": "string", "format": "date-time"},
        "session_id": {"type": "string"},
        "rule": {"type": "string", "enum": list(RULES)},
        "matched_key": {"type": ["string", "null"]},
        "token_count": {"type": "integer", "minimum": 1},
        "latency_ms": {"type": "number", "minimum": 0},
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(DECISION_SCHEMA)


def validate_decision(payload: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(payload), key=lambda e: e.path)
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ValueError(f"decision log validation failed: {messages}")


@dataclass
class DecisionLogRecord:
    turn_id: int
    session_id: str
    rule: str
    matched_key: Optional[str]
    token_count: int
    latency_ms: float
    received_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "turn_id": self.turn_id,
            "received_at": self.received_at,
            "session_id": self.session_id,
            "rule": self.rule,
            "matched_key": self.matched_key,
            "token_count": self.token_count,
            "latency_ms": self.latency_ms,
        }
        validate_decision(payload)
        return payload
