"""Configuration loader for the response engine."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .knowledge import KnowledgeBase, load_knowledge_base, load_knowledge_file
from .matcher import FALLBACK_RESPONSE

DEFAULT_GREETING = "Hello! I am a simple Java chatbot. Type 'quit' to exit."
DEFAULT_FAREWELL = "Goodbye! Have a great day."
DEFAULT_EMPTY_INPUT_RESPONSE = "Please say something!"
DEFAULT_EXIT_COMMANDS = ("quit", "exit")


@dataclass(frozen=True)
class DecisionLogConfig:
    enabled: bool


@dataclass(frozen=True)
class ParleyConfig:
    knowledge_path: Optional[Path]
    fallback_response: str
    empty_input_response: str
    greeting: str
    farewell: str
    exit_commands: Tuple[str, ...]
    decision_log: DecisionLogConfig
    log_level: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParleyConfig":
        knowledge_path = data.get("knowledge_path")
        exit_commands = data.get("exit_commands") or DEFAULT_EXIT_COMMANDS
        if isinstance(exit_commands, str):
            exit_commands = [exit_commands]
        decision_log = data.get("decision_log")
        if not isinstance(decision_log, dict):
            decision_log = {"enabled": True if decision_log is None else decision_log}
        return cls(
            knowledge_path=Path(knowledge_path) if knowledge_path else None,
            fallback_response=data.get("fallback_response") or FALLBACK_RESPONSE,
            empty_input_response=data.get("empty_input_response") or DEFAULT_EMPTY_INPUT_RESPONSE,
            greeting=data.get("greeting") or DEFAULT_GREETING,
            farewell=data.get("farewell") or DEFAULT_FAREWELL,
            exit_commands=tuple(str(command).strip().lower() for command in exit_commands),
            decision_log=DecisionLogConfig(
                enabled=bool(decision_log.get("enabled", True)),
            ),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )


ENV_MAP = {
    "knowledge_path": "PARLEY_KNOWLEDGE_PATH",
    "fallback_response": "PARLEY_FALLBACK_RESPONSE",
    "empty_input_response": "PARLEY_EMPTY_INPUT_RESPONSE",
    "greeting": "PARLEY_GREETING",
    "farewell": "PARLEY_FAREWELL",
    "exit_commands": "PARLEY_EXIT_COMMANDS",
    "decision_log.enabled": "PARLEY_DECISION_LOG",
    "log_level": "PARLEY_LOG_LEVEL",
}

_TRUTHY = {"1", "true", "yes", "on"}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = json.loads(json.dumps(config_data))  # deep copy via json

    for dotted_key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        value: Any = os.environ[env_name]
        target = merged
        parts = dotted_key.split(".")
        for part in parts[:-1]:
            if not isinstance(target.get(part), dict):
                target[part] = {}
            target = target[part]
        last = parts[-1]
        if last == "enabled":
            value = value.strip().lower() in _TRUTHY
        elif last == "exit_commands":
            value = [command for command in value.split(",") if command.strip()]
        target[last] = value

    return merged


def load_config(config_path: str | Path = "config/parley.defaults.yml") -> ParleyConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = load_yaml(path)
    data = merge_env_overrides(data)
    return ParleyConfig.from_dict(data)


def load_engine(config: ParleyConfig) -> KnowledgeBase:
    """Build the knowledge base the config points at, or the built-in one."""
    if config.knowledge_path is None:
        return load_knowledge_base()
    return load_knowledge_file(config.knowledge_path)
