"""Data shapes shared by the relay pipeline and its transports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

AliasTable = Mapping[str, str]


@dataclass(frozen=True)
class MessageEvent:
    """One inbound chat message. An empty ``sender_id`` marks a bot/system message."""

    sender_id: str
    channel_id: str
    text: str


@dataclass(frozen=True)
class AccountRef:
    id: int
    display_name: str


@dataclass(frozen=True)
class Issue:
    id: int
    subject: str
    status_name: str
    assignee: Optional[AccountRef] = None


@dataclass(frozen=True)
class TicketingUser:
    id: int
    login: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class ChatUser:
    id: str
    handle: str
    real_name: str


@dataclass(frozen=True)
class NotificationField:
    key: str
    value: str


@dataclass(frozen=True)
class Notification:
    text: str
    fields: tuple[NotificationField, ...]

    def field(self, key: str) -> Optional[str]:
        for item in self.fields:
            if item.key == key:
                return item.value
        return None
