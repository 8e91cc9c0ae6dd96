"""Collaborator interfaces the relay pipeline depends on.

The pipeline never talks to Redmine or Slack directly; it only sees these
protocols so it can be built with fakes in tests.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from models import ChatUser, Issue, Notification, TicketingUser


class IssueSource(Protocol):
    def fetch_issue(self, issue_id: int) -> Issue:
        """Return the issue or raise ``LookupFailure``."""
        ...


class TicketingUserSource(Protocol):
    def fetch_user(self, user_id: int) -> TicketingUser:
        """Return the full ticketing account or raise ``LookupFailure``."""
        ...


class ChatDirectory(Protocol):
    def list_users(self) -> Sequence[ChatUser]:
        """Return every chat account, in directory order, or raise ``TransportError``."""
        ...


class MessagePoster(Protocol):
    def post_message(self, channel_id: str, notification: Notification) -> None:
        """Post the notification or raise ``TransportError``."""
        ...
