"""Per-message relay pipeline: ticket reference in, enriched notification out.

Each call to :meth:`NotificationPipeline.handle` is independent. The pipeline
holds only read-only state, so Bolt may run several of them at once.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from errors import LookupFailure, TransportError
from identity import resolve_assignee
from models import AliasTable, MessageEvent
from notification import format_notification
from ports import ChatDirectory, IssueSource, MessagePoster, TicketingUserSource
from ticket_extractor import extract_ticket_id

logger = logging.getLogger(__name__)


class PipelineOutcome(str, Enum):
    IGNORED_SENDER = "ignored_sender"
    NO_TICKET = "no_ticket"
    ISSUE_LOOKUP_FAILED = "issue_lookup_failed"
    POST_FAILED = "post_failed"
    POSTED = "posted"


class NotificationPipeline:
    def __init__(
        self,
        issues: IssueSource,
        users: TicketingUserSource,
        directory: ChatDirectory,
        poster: MessagePoster,
        aliases: AliasTable,
        endpoint: str,
        notify_channel: Optional[str] = None,
    ) -> None:
        self._issues = issues
        self._users = users
        self._directory = directory
        self._poster = poster
        self._aliases = aliases
        self._endpoint = endpoint
        self._notify_channel = notify_channel or None

    def handle(self, event: MessageEvent) -> PipelineOutcome:
        if not event.sender_id:
            return PipelineOutcome.IGNORED_SENDER

        ticket_id = extract_ticket_id(event.text)
        if ticket_id is None:
            return PipelineOutcome.NO_TICKET

        try:
            issue = self._issues.fetch_issue(ticket_id)
        except LookupFailure as exc:
            logger.info("issue_lookup_failed", extra={"ticket_id": ticket_id, "error": str(exc)})
            return PipelineOutcome.ISSUE_LOOKUP_FAILED

        assignee = resolve_assignee(issue.assignee, self._users, self._directory, self._aliases)
        notification = format_notification(issue, self._endpoint, assignee)

        channel = self._notify_channel or event.channel_id
        try:
            self._poster.post_message(channel, notification)
        except TransportError:
            return PipelineOutcome.POST_FAILED

        logger.info(
            "notification_posted",
            extra={"ticket_id": ticket_id, "channel": channel, "user": event.sender_id},
        )
        return PipelineOutcome.POSTED
