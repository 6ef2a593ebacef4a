"""Relay bot configuration — centralized environment variable management.

All runtime configuration comes from the process environment (or a .env file
in development). This module is the single place where those variables are
declared, validated, and typed.

No module should call os.environ directly — import settings from here instead.

Usage:
    from relaybot.config import get_settings

    settings = get_settings()
    channel = settings.channel_id

Environment variables:

  Required:
    CHANNEL_ID            — Numeric identifier of the target channel
                            (e.g. -1001234567890).
    TELEGRAM_BOT_TOKEN    — Telegram Bot API token. TELOXIDE_TOKEN is accepted
                            as an alias so existing deployments keep working.

  Optional:
    HELP_MSG              — Reply to /start and /help.
    SOURCE_MSG            — Reply to /source.
    SUBSCRIBE_MSG         — Reply when the sender is not a channel member.
    SENT_MSG              — Reply after a message was forwarded.
    CHECK_SUBSCRIPTION    — Gate forwarding on channel membership. Default: true.
    LOGFIRE_TOKEN         — Logfire project token for observability.
                            If unset, logfire runs in local/dev mode (no remote export).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HELP_MSG = (
    "This is a bot that allows all channel subscribers to send messages to it. "
    "Just send me a message and I'll forward it to the channel."
)
DEFAULT_SOURCE_MSG = "Source code: https://github.com/averyanalex/infinity-tg-admins-bot"
DEFAULT_SUBSCRIBE_MSG = "Please subscribe to the channel."
DEFAULT_SENT_MSG = "The message was successfully sent to the channel."


class RelaySettings(BaseSettings):
    """Centralized configuration for the relay bot.

    Field names map to env vars by uppercasing: channel_id → CHANNEL_ID.
    Instances are frozen — every concurrent handler reads the same object.

    Instantiate via get_settings() to benefit from caching.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    # ── Reply strings ────────────────────────────────────────────────────────

    help_msg: str = DEFAULT_HELP_MSG
    source_msg: str = DEFAULT_SOURCE_MSG
    subscribe_msg: str = DEFAULT_SUBSCRIBE_MSG
    sent_msg: str = DEFAULT_SENT_MSG

    # ── Channel ──────────────────────────────────────────────────────────────

    channel_id: int
    """Target channel. Forwarded messages are posted here and membership is
    checked against it. Channel ids are usually negative (-100…)."""

    check_subscription: bool = True
    """When false every sender is treated as subscribed and no membership
    query is made."""

    # ── Chat integration ─────────────────────────────────────────────────────

    telegram_bot_token: SecretStr = Field(
        validation_alias=AliasChoices("TELEGRAM_BOT_TOKEN", "TELOXIDE_TOKEN"),
    )
    """Telegram Bot API token. SecretStr prevents accidental logging."""

    # ── Observability ────────────────────────────────────────────────────────

    logfire_token: SecretStr | None = None

    # ── Validators ───────────────────────────────────────────────────────────

    @field_validator("channel_id")
    @classmethod
    def validate_channel_id(cls, v: int) -> int:
        if v == 0:
            msg = "CHANNEL_ID must be a non-zero Telegram chat id."
            raise ValueError(msg)
        return v


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    """Return the cached RelaySettings instance.

    Reads from environment on first call, then caches for the process lifetime.
    Call clear_settings_cache() in tests to reset between test cases.
    """
    return RelaySettings()  # pyright: ignore[reportCallIssue]  — BaseSettings reads from env


def clear_settings_cache() -> None:
    """Clear the settings cache."""
    get_settings.cache_clear()
