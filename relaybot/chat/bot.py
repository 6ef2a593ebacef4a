"""Telegram bot application factory for the relay bot.

This module provides build_application() — the single function responsible for
constructing a fully-wired python-telegram-bot Application instance.

Responsibilities:
  - Accept RelaySettings and return a ready-to-run Application
  - Throttle outgoing Bot API calls with PTB's AIORateLimiter
  - Register command, message and error handlers
  - Publish the command menu once the bot is initialized

Usage (from __main__.py):
    from relaybot.chat.bot import build_application
    from relaybot.config import get_settings

    app = build_application(get_settings())
    app.run_polling(allowed_updates=Update.ALL_TYPES)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from telegram.ext import (
    AIORateLimiter,
    Application,
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    filters,
)

from relaybot.chat.commands import Command, bot_commands
from relaybot.chat.handlers import SETTINGS_KEY, handle_command, handle_error, handle_message

if TYPE_CHECKING:
    from relaybot.config import RelaySettings

logger = logging.getLogger(__name__)


async def _publish_commands(application: Application) -> None:
    """post_init hook — register the command menu with Telegram."""
    await application.bot.set_my_commands(bot_commands())
    logger.info("Published %d bot commands", len(Command))


def build_application(settings: RelaySettings) -> Application:
    """Build and return a configured Telegram Application.

    Registers:
      - /source, /start, /help → handle_command (static replies)
      - Every other message     → handle_message (relay to the channel)
      - Errors from any handler → handle_error

    The command handler is registered before the catch-all message handler so
    PTB's handler priority (group 0, first match) routes known commands to it.
    Unknown /commands and non-text messages fall through to handle_message.
    Edited messages match neither handler.

    Updates are processed concurrently; settings are the only shared object
    and are never mutated.

    Args:
        settings: Loaded RelaySettings (token, channel, reply strings).

    Returns:
        A fully configured Application ready for run_polling() or run_webhook().
    """
    application: Application = (
        ApplicationBuilder()
        .token(settings.telegram_bot_token.get_secret_value())
        .rate_limiter(AIORateLimiter())
        .concurrent_updates(True)
        .post_init(_publish_commands)
        .build()
    )

    application.bot_data[SETTINGS_KEY] = settings

    # Both handlers see new messages only; edited messages are ignored.
    application.add_handler(
        CommandHandler(
            [command.value for command in Command],
            handle_command,
            filters=filters.UpdateType.MESSAGE,
        )
    )
    application.add_handler(MessageHandler(filters.UpdateType.MESSAGE, handle_message))
    application.add_error_handler(handle_error)

    return application
