"""Per-conversation turn handling shared by every front end."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Iterable, Optional

from .config import ParleyConfig, DEFAULT_EXIT_COMMANDS
from .knowledge import KnowledgeBase
from .matcher import MatchDecision, match
from .normalizer import normalize
from .observability import DecisionLogRecord

logger = logging.getLogger(__name__)

TURN_REPLY = "reply"
TURN_EMPTY = "empty"
TURN_EXIT = "exit"


def is_exit_command(text: str, commands: Iterable[str] = DEFAULT_EXIT_COMMANDS) -> bool:
    return text.strip().lower() in {command.lower() for command in commands}


@dataclass(frozen=True)
class TurnResult:
    kind: str
    reply: str
    decision: Optional[MatchDecision] = None

    @property
    def is_exit(self) -> bool:
        return self.kind == TURN_EXIT


class ChatSession:
    """
    One conversation with the engine.

    Exit commands and empty input are settled here, so the matcher only
    ever sees input with at least one token. Nothing from earlier turns
    affects later replies; the session keeps a turn counter for logging.
    """

    def __init__(
        self,
        kb: KnowledgeBase,
        config: ParleyConfig,
        session_id: Optional[str] = None,
    ) -> None:
        self._kb = kb
        self._config = config
        self.session_id = session_id or uuid.uuid4().hex
        self.turns = 0

    def greeting(self) -> str:
        return self._config.greeting

    def handle(self, text: str) -> TurnResult:
        if is_exit_command(text, self._config.exit_commands):
            logger.info("session=%s exit requested", self.session_id)
            return TurnResult(kind=TURN_EXIT, reply=self._config.farewell)

        started = time.perf_counter()
        normalized = normalize(text)
        if normalized.is_empty:
            return TurnResult(kind=TURN_EMPTY, reply=self._config.empty_input_response)

        decision = match(normalized, self._kb, self._config.fallback_response)
        self.turns += 1

        if self._config.decision_log.enabled:
            record = DecisionLogRecord(
                turn_id=self.turns,
                session_id=self.session_id,
                rule=decision.rule,
                matched_key=decision.key,
                token_count=len(normalized.tokens),
                latency_ms=(time.perf_counter() - started) * 1000.0,
            )
            logger.info("decision %s", json.dumps(record.to_dict()))

        return TurnResult(kind=TURN_REPLY, reply=decision.response, decision=decision)
