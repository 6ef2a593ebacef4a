"""Relay bot Telegram chat layer.

Public API:
  build_application  — construct a fully-wired PTB Application
  handle_command     — /source, /start, /help handler
  handle_message     — subscription-gated relay into the channel
  handle_error       — per-update error reporting
  Command            — the bot's command set

Typical usage:
    from relaybot.chat import build_application
    app = build_application(settings)
    app.run_polling()
"""

from relaybot.chat.bot import build_application
from relaybot.chat.commands import Command
from relaybot.chat.handlers import handle_command, handle_error, handle_message

__all__ = [
    "Command",
    "build_application",
    "handle_command",
    "handle_error",
    "handle_message",
]
