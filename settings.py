# settings.py
"""Centralized configuration using Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

load_dotenv()


class SlackSettings(BaseSettings):
    bot_token: str = Field(alias="SLACK_BOT_TOKEN")
    app_token: str = Field(alias="SLACK_APP_TOKEN")
    notify_channel: Optional[str] = Field(alias="SLACK_NOTIFY_CHANNEL", default=None)


class RedmineSettings(BaseSettings):
    endpoint: str = Field(alias="REDMINE_ENDPOINT")
    api_key: str = Field(alias="REDMINE_APIKEY")
    timeout_seconds: float = Field(alias="REDMINE_TIMEOUT", default=10)


class AliasSettings(BaseSettings):
    path: str = Field(alias="USER_MAPPING_PATH", default="./usermapping.json")


class NotificationSettings(BaseSettings):
    # Japanese workspaces usually title these 担当者 / ステータス.
    assignee_title: str = Field(alias="ASSIGNEE_FIELD_TITLE", default="Assignee")
    status_title: str = Field(alias="STATUS_FIELD_TITLE", default="Status")


class LoggingSettings(BaseSettings):
    level: str = Field(alias="RELAY_LOG_LEVEL", default="INFO")
    json_enabled: bool = Field(alias="RELAY_LOG_JSON", default=False)


class RelaySettings(BaseSettings):
    slack: SlackSettings
    redmine: RedmineSettings
    aliases: AliasSettings
    notification: NotificationSettings
    logging: LoggingSettings

    @classmethod
    def load(cls) -> RelaySettings:
        try:
            return cls(
                slack=SlackSettings(),  # type: ignore[call-arg]
                redmine=RedmineSettings(),  # type: ignore[call-arg]
                aliases=AliasSettings(),  # type: ignore[call-arg]
                notification=NotificationSettings(),  # type: ignore[call-arg]
                logging=LoggingSettings(),  # type: ignore[call-arg]
            )
        except ValidationError as exc:
            missing = [error["loc"][0] for error in exc.errors() if error.get("type") == "missing"]
            msg = "Missing required configuration values: " + ", ".join(
                sorted({str(loc) for loc in missing})
            )
            raise RuntimeError(msg) from exc


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    return RelaySettings.load()
