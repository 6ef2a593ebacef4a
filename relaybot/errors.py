"""Errors raised while relaying a single update.

Every error is local to one handling: the handler raises, the application
error handler logs it, and the bot keeps serving other updates. Transport
failures surface as telegram.error.TelegramError and are not wrapped.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base class for relay handling failures."""


class MissingTextError(RelayError):
    """A subscribed sender's message has no text body (photo, sticker, ...).

    Nothing is forwarded and the sender gets no reply.
    """

    def __init__(self, chat_id: int) -> None:
        self.chat_id = chat_id
        super().__init__(f"message without text from chat {chat_id}")


class IdentifierConversionError(RelayError):
    """A chat id cannot be used as the user id of a membership query."""

    def __init__(self, chat_id: int) -> None:
        self.chat_id = chat_id
        super().__init__(f"chat id {chat_id} is not a valid user id")
