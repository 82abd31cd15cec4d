#!/usr/bin/env python3
"""
Unit tests for the Telegram front end (no network)
"""

import asyncio
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from bot.telegram_bot import MAX_MESSAGE_CHARS, ParleyBot, main
from parley.config import ParleyConfig
from parley.knowledge import load_knowledge_base


def make_update(chat_id, text):
    update = MagicMock()
    update.effective_chat.id = chat_id
    update.message.text = text
    update.message.reply_text = AsyncMock()
    return update


@pytest.fixture
def bot():
    return ParleyBot(load_knowledge_base(), ParleyConfig.from_dict({}))


class TestParleyBot:

    def test_start_sends_greeting(self, bot):
        update = make_update(1, "/start")
        asyncio.run(bot.start_command(update, None))
        update.message.reply_text.assert_awaited_once_with(bot.config.greeting)

    def test_message_reply(self, bot):
        update = make_update(1, "Hello, Java!")
        asyncio.run(bot.handle_message(update, None))
        update.message.reply_text.assert_awaited_once_with(bot.kb.lookup("hello"))

    def test_empty_after_normalization(self, bot):
        update = make_update(1, "42!!")
        asyncio.run(bot.handle_message(update, None))
        update.message.reply_text.assert_awaited_once_with("Please say something!")

    def test_sessions_per_chat(self, bot):
        asyncio.run(bot.handle_message(make_update(1, "java"), None))
        asyncio.run(bot.handle_message(make_update(2, "oop"), None))
        assert set(bot.sessions) == {"1", "2"}
        assert bot.sessions["1"].turns == 1

    def test_exit_resets_session(self, bot):
        asyncio.run(bot.handle_message(make_update(1, "java"), None))
        update = make_update(1, "Exit")
        asyncio.run(bot.handle_message(update, None))
        update.message.reply_text.assert_awaited_once_with("Goodbye! Have a great day.")
        assert "1" not in bot.sessions

    def test_long_reply_is_split(self):
        long_reply = "x" * (MAX_MESSAGE_CHARS + 10)
        bot = ParleyBot(
            load_knowledge_base(),
            ParleyConfig.from_dict({"fallback_response": long_reply}),
        )
        update = make_update(1, "nothing matches here")
        asyncio.run(bot.handle_message(update, None))
        assert update.message.reply_text.await_count == 2

    def test_no_text_ignored(self, bot):
        update = make_update(1, None)
        asyncio.run(bot.handle_message(update, None))
        update.message.reply_text.assert_not_awaited()

    def test_sessions_bounded_by_recent_activity(self):
        bot = ParleyBot(load_knowledge_base(), ParleyConfig.from_dict({}), max_sessions=2)
        first = bot.session_for("1")
        bot.session_for("2")
        assert bot.session_for("1") is first
        bot.session_for("3")

        assert list(bot.sessions) == ["1", "3"]
        assert len(bot.sessions) == 2


class TestMain:

    def test_missing_config_exits(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("PARLEY_CONFIG", str(tmp_path / "missing.yml"))
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "dummy")

        with pytest.raises(SystemExit) as excinfo:
            main()

        assert excinfo.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_bad_knowledge_file_exits(self, monkeypatch, tmp_path):
        knowledge = tmp_path / "knowledge.json"
        knowledge.write_text('[{"key": "ping", "response": null}]', encoding="utf-8")
        config = tmp_path / "config.yml"
        config.write_text(f"knowledge_path: {knowledge}", encoding="utf-8")
        monkeypatch.setenv("PARLEY_CONFIG", str(config))
        monkeypatch.delenv("PARLEY_KNOWLEDGE_PATH", raising=False)
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "dummy")

        with pytest.raises(SystemExit) as excinfo:
            main()

        assert excinfo.value.code == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
