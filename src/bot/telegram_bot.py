#!/usr/bin/env python3
"""
Parley Telegram Bot

Routes every text message through a per-chat parley session:
  quit / exit   → farewell, session reset
  empty input   → "please say something"
  anything else → rule-matched reply

Commands:
  /start - Greeting and a fresh session

Usage:
  TELEGRAM_BOT_TOKEN=your_token python -m bot.telegram_bot
"""

import logging
import os
import sys
from collections import OrderedDict
from pathlib import Path
from typing import Dict

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    filters,
    ContextTypes,
)

from parley.config import ParleyConfig, load_config, load_engine
from parley.errors import ParleyError
from parley.knowledge import KnowledgeBase
from parley.session import ChatSession

logger = logging.getLogger(__name__)

# Telegram has a 4096 char limit per message
MAX_MESSAGE_CHARS = 4000

# Least recently active chats are dropped past this many sessions
MAX_SESSIONS = 1000


class ParleyBot:
    """Keeps one session per chat over a shared, read-only knowledge base."""

    def __init__(self, kb: KnowledgeBase, config: ParleyConfig, max_sessions: int = MAX_SESSIONS):
        self.kb = kb
        self.config = config
        self.max_sessions = max_sessions
        self.sessions: Dict[str, ChatSession] = OrderedDict()

    def session_for(self, chat_id: str) -> ChatSession:
        if chat_id in self.sessions:
            self.sessions.move_to_end(chat_id)
            return self.sessions[chat_id]

        self.sessions[chat_id] = ChatSession(self.kb, self.config, session_id=chat_id)
        while len(self.sessions) > self.max_sessions:
            evicted, _ = self.sessions.popitem(last=False)
            logger.debug("dropping idle session %s", evicted)
        return self.sessions[chat_id]

    def reset(self, chat_id: str) -> None:
        self.sessions.pop(chat_id, None)

    async def start_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle /start command."""
        chat_id = str(update.effective_chat.id)
        self.reset(chat_id)
        await update.message.reply_text(self.session_for(chat_id).greeting())

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle any text message."""
        chat_id = str(update.effective_chat.id)
        message = update.message.text

        if not message:
            return

        logger.info("Message from %s: %s", chat_id, message[:100])

        result = self.session_for(chat_id).handle(message)
        if result.is_exit:
            self.reset(chat_id)

        for i in range(0, len(result.reply), MAX_MESSAGE_CHARS):
            await update.message.reply_text(result.reply[i:i + MAX_MESSAGE_CHARS])


def build_application(token: str, bot: ParleyBot) -> Application:
    app = Application.builder().token(token).build()
    app.add_handler(CommandHandler("start", bot.start_command))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, bot.handle_message))
    return app


def main():
    """Start the bot."""
    try:
        config = load_config(os.environ.get("PARLEY_CONFIG", "config/parley.defaults.yml"))
    except FileNotFoundError as e:
        print(f"parley: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        level=config.log_level,
    )

    token = os.environ.get("TELEGRAM_BOT_TOKEN")
    if not token:
        logger.error("TELEGRAM_BOT_TOKEN not set")
        sys.exit(1)

    try:
        bot = ParleyBot(load_engine(config), config)
    except (FileNotFoundError, ParleyError) as e:
        logger.error("Cannot load knowledge base: %s", e)
        sys.exit(1)
    logger.info("Starting Parley Telegram bot with %r", bot.kb)

    app = build_application(token, bot)

    logger.info("Bot is running. Polling for messages...")
    app.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
