"""Telegram handlers for the relay bot.

Responsibilities:
  - Answer /source, /start and /help with the configured strings
  - Gate freeform messages on channel membership (when enabled)
  - Forward the text of accepted messages into the channel, then confirm
  - Report per-update failures without taking the bot down

Architecture decisions reflected here:
  - Settings live in application.bot_data["settings"], placed there once by
    build_application() and only ever read afterwards
  - A direct chat's id IS the sender's user id; the membership query uses it
  - Handlers raise on failure; handle_error (registered on the Application)
    logs the error. The sender gets no reply on error paths
  - No state is kept between updates — replaying an update forwards it again
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import logfire
from telegram.constants import ChatMemberStatus

from relaybot.chat.commands import parse_command, reply_for
from relaybot.errors import IdentifierConversionError, MissingTextError

if TYPE_CHECKING:
    from telegram import ChatMember, Update
    from telegram.ext import ContextTypes

    from relaybot.config import RelaySettings

logger = logging.getLogger(__name__)

# Key under which build_application() stores RelaySettings in bot_data.
SETTINGS_KEY = "settings"


# ── Helpers ───────────────────────────────────────────────────────────────────


def settings_from_context(context: ContextTypes.DEFAULT_TYPE) -> RelaySettings:
    """Return the RelaySettings shared by every handler invocation.

    Raises:
        RuntimeError: If the application was built without settings.
    """
    settings = context.application.bot_data.get(SETTINGS_KEY)
    if settings is None:
        raise RuntimeError("bot_data has no relay settings — use build_application()")
    return settings


def user_id_from_chat(chat_id: int) -> int:
    """Map a direct chat id to the sender's user id.

    In a private chat Telegram uses the user's id as the chat id. User ids are
    unsigned, so a negative id (group, supergroup, channel) cannot name a user.

    Raises:
        IdentifierConversionError: If chat_id is negative.
    """
    if chat_id < 0:
        raise IdentifierConversionError(chat_id)
    return chat_id


def is_present(member: ChatMember) -> bool:
    """True if the member is currently in the chat.

    Left and banned (kicked) members are absent. Restricted members are present
    only while Telegram still reports them as members.
    """
    if member.status in (ChatMemberStatus.LEFT, ChatMemberStatus.BANNED):
        return False
    if member.status == ChatMemberStatus.RESTRICTED:
        return bool(getattr(member, "is_member", True))
    return True


# ── Handlers ──────────────────────────────────────────────────────────────────


async def handle_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply to /source, /start or /help with the configured string.

    Exactly one message is sent, to the chat the command came from.
    """
    message = update.effective_message
    chat = update.effective_chat
    if message is None or chat is None:
        raise ValueError("handle_command called on an update without a message")

    command = parse_command(message.text, context.bot.username)
    if command is None:
        raise ValueError(f"handle_command called on a non-command message: {message.text!r}")

    settings = settings_from_context(context)
    with logfire.span("relay.command {command}", command=command.value, chat_id=chat.id):
        await context.bot.send_message(chat_id=chat.id, text=reply_for(command, settings))


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Relay a freeform message into the channel.

    Flow:
      1. If the subscription gate is on, query the sender's membership in the
         channel; otherwise treat the sender as subscribed.
      2. Subscribed: forward the text verbatim to the channel, then send the
         confirmation to the sender. A message without text raises
         MissingTextError before anything is sent.
      3. Not subscribed: send the subscribe prompt to the sender.

    Transport errors propagate unchanged; sends that already happened stay.

    Args:
        update: The incoming Telegram update.
        context: PTB handler context (provides context.bot for API calls).
    """
    message = update.effective_message
    chat = update.effective_chat
    if message is None or chat is None:
        raise ValueError("handle_message called on an update without a message")

    settings = settings_from_context(context)

    with logfire.span("relay.message", chat_id=chat.id):
        if settings.check_subscription:
            member = await context.bot.get_chat_member(
                chat_id=settings.channel_id,
                user_id=user_id_from_chat(chat.id),
            )
            subscribed = is_present(member)
        else:
            subscribed = True

        if not subscribed:
            await context.bot.send_message(chat_id=chat.id, text=settings.subscribe_msg)
            logger.info("user not subscribed (chat=%s)", chat.id)
            return

        if not message.text:
            raise MissingTextError(chat.id)

        await context.bot.send_message(chat_id=settings.channel_id, text=message.text)
        await context.bot.send_message(chat_id=chat.id, text=settings.sent_msg)
        logger.info("message sent to the channel (chat=%s)", chat.id)


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Application error handler — log the failure of a single update.

    Registered via Application.add_error_handler(). PTB calls it with the
    exception in context.error; the bot keeps processing other updates.
    """
    error = context.error
    chat = getattr(update, "effective_chat", None)
    chat_id = chat.id if chat is not None else None

    logger.error("Relay handling failed for chat=%s", chat_id, exc_info=error)
    logfire.error(
        "Relay handling failed: {error_type}",
        error_type=type(error).__name__,
        chat_id=chat_id,
    )
