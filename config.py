"""Accessors over the cached relay settings."""

from functools import lru_cache
from typing import Dict, Optional

from notification import ASSIGNEE_FIELD, STATUS_FIELD
from settings import RelaySettings, get_settings


@lru_cache(maxsize=1)
def _cached_settings() -> RelaySettings:
    return get_settings()


def get_slack_bot_token() -> str:
    return _cached_settings().slack.bot_token


def get_slack_app_token() -> str:
    return _cached_settings().slack.app_token


def get_notify_channel() -> Optional[str]:
    return _cached_settings().slack.notify_channel


def get_redmine_endpoint() -> str:
    return _cached_settings().redmine.endpoint


def get_redmine_api_key() -> str:
    return _cached_settings().redmine.api_key


def get_redmine_timeout() -> float:
    return _cached_settings().redmine.timeout_seconds


def get_alias_path() -> str:
    return _cached_settings().aliases.path


def get_field_titles() -> Dict[str, str]:
    notification = _cached_settings().notification
    return {ASSIGNEE_FIELD: notification.assignee_title, STATUS_FIELD: notification.status_title}


def get_log_level() -> str:
    return _cached_settings().logging.level


def is_log_json_enabled() -> bool:
    return _cached_settings().logging.json_enabled


__all__ = [
    "get_slack_bot_token",
    "get_slack_app_token",
    "get_notify_channel",
    "get_redmine_endpoint",
    "get_redmine_api_key",
    "get_redmine_timeout",
    "get_alias_path",
    "get_field_titles",
    "get_log_level",
    "is_log_json_enabled",
    "get_settings",
]
