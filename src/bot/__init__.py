"""Front ends for the parley engine: console and Telegram."""
