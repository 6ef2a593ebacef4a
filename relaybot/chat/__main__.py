"""Entry point for the relay bot.

Starts the bot using long polling. Intended to be run as a module:

    python -m relaybot.chat

or via the installed console script:

    relaybot

The bot token and all other configuration are read from environment variables
(or from a .env file in development).
"""

from __future__ import annotations

import logging

import logfire
from telegram import Update

from relaybot.chat.bot import build_application
from relaybot.config import get_settings

# ── Logging ───────────────────────────────────────────────────────────────────

logging.basicConfig(
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    level=logging.INFO,
)
# httpx logs every long-polling request at INFO.
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


# ── Entrypoint ────────────────────────────────────────────────────────────────


def main() -> None:
    """Start the relay bot with long polling.

    Configures Logfire tracing, then runs the bot until interrupted (Ctrl-C
    or SIGTERM). Stopping does not wait for in-flight handlers.
    """
    settings = get_settings()

    logfire_token = settings.logfire_token
    logfire.configure(
        token=logfire_token.get_secret_value() if logfire_token else None,
        service_name="relaybot",
        send_to_logfire="if-token-present",
    )

    logger.info(
        "Starting relay bot (channel: %s, check_subscription: %s)",
        settings.channel_id,
        settings.check_subscription,
    )

    application = build_application(settings)

    # run_polling blocks until the process receives SIGINT / SIGTERM.
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
