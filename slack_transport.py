"""Slack Web API adapter: user directory listing and notification posting."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackClientError

from errors import TransportError
from models import ChatUser, Notification
from notification import ASSIGNEE_FIELD, STATUS_FIELD

DEFAULT_FIELD_TITLES: dict[str, str] = {ASSIGNEE_FIELD: "Assignee", STATUS_FIELD: "Status"}
USERS_PAGE_SIZE = 200

logger = logging.getLogger(__name__)


class SlackTransport:
    def __init__(self, client: WebClient, field_titles: Optional[Mapping[str, str]] = None) -> None:
        self.client = client
        self.field_titles = {**DEFAULT_FIELD_TITLES, **(field_titles or {})}

    def list_users(self) -> list[ChatUser]:
        users: list[ChatUser] = []
        cursor: Optional[str] = None
        while True:
            try:
                response = self.client.users_list(cursor=cursor, limit=USERS_PAGE_SIZE)
            except (SlackClientError, OSError) as exc:
                logger.error("slack_users_list_failed", extra={"error": str(exc)})
                raise TransportError(f"Slack users.list failed: {exc}") from exc

            members = response.get("members") or []
            users.extend(_map_user(member) for member in members if isinstance(member, dict))

            metadata = response.get("response_metadata") or {}
            cursor = metadata.get("next_cursor") or None
            if not cursor:
                return users

    def post_message(self, channel_id: str, notification: Notification) -> None:
        attachment = {
            "fields": [
                {
                    "title": self.field_titles.get(item.key, item.key),
                    "value": item.value,
                    "short": True,
                }
                for item in notification.fields
            ]
        }
        try:
            self.client.chat_postMessage(
                channel=channel_id,
                text=notification.text,
                attachments=[attachment],
                link_names=True,
            )
        except (SlackClientError, OSError) as exc:
            logger.error(
                "slack_post_failed",
                extra={"channel": channel_id, "error": str(exc)},
            )
            raise TransportError(f"Slack chat.postMessage failed: {exc}") from exc


def _map_user(member: dict[str, Any]) -> ChatUser:
    profile = member.get("profile") or {}
    real_name = member.get("real_name") or profile.get("real_name") or ""
    return ChatUser(
        id=str(member.get("id", "")),
        handle=str(member.get("name", "")),
        real_name=str(real_name),
    )
