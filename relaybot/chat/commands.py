"""Bot command set for the relay bot.

The command surface is closed: /source, /start and /help. Each command maps
to one configured reply string. Anything that does not parse as one of these
commands is a freeform message and goes to the relay path.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from telegram import BotCommand

if TYPE_CHECKING:
    from relaybot.config import RelaySettings


class Command(str, Enum):
    """Known bot commands. The value is the lowercase command token."""

    SOURCE = "source"
    START = "start"
    HELP = "help"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[Command, str] = {
    Command.SOURCE: "send link to source code",
    Command.START: "send start message",
    Command.HELP: "send help message",
}

# Command → name of the RelaySettings field holding its reply.
_REPLY_FIELDS: dict[Command, str] = {
    Command.SOURCE: "source_msg",
    Command.START: "help_msg",
    Command.HELP: "help_msg",
}


def parse_command(text: str | None, bot_username: str | None = None) -> Command | None:
    """Classify message text as a known command.

    Accepts "/cmd", "/cmd args..." and "/cmd@botname". Matching is
    case-insensitive. A "/cmd@otherbot" addressed to a different bot is not
    ours and returns None.

    Args:
        text: Raw message text (may be None for non-text messages).
        bot_username: This bot's username, without the leading "@".

    Returns:
        The matching Command, or None for freeform messages.
    """
    if not text or not text.startswith("/"):
        return None

    parts = text[1:].split(maxsplit=1)
    if not parts:
        return None
    name, _, addressee = parts[0].partition("@")
    if addressee and (bot_username is None or addressee.lower() != bot_username.lower()):
        return None

    try:
        return Command(name.lower())
    except ValueError:
        return None


def reply_for(command: Command, settings: RelaySettings) -> str:
    """Return the configured reply text for a command."""
    return getattr(settings, _REPLY_FIELDS[command])


def bot_commands() -> list[BotCommand]:
    """Command menu published to Telegram via set_my_commands at startup."""
    return [BotCommand(command.value, command.description) for command in Command]
