"""Build the Slack message posted for a referenced issue."""

from __future__ import annotations

from models import Issue, Notification, NotificationField

ASSIGNEE_FIELD = "assignee"
STATUS_FIELD = "status"


def escape_text(value: str) -> str:
    """Escape the three characters Slack treats as control sequences."""
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_assignee(token: str) -> str:
    """Escape a plain-name token; mentions and broadcast markers pass through."""
    if token.startswith(("<@", "<!")) and token.endswith(">"):
        return token
    return escape_text(token)


def issue_url(endpoint: str, issue_id: int) -> str:
    return f"{endpoint.rstrip('/')}/issues/{issue_id}"


def format_notification(issue: Issue, endpoint: str, assignee: str) -> Notification:
    """Return the link line plus the assignee and status fields, in that order."""
    text = f"<{issue_url(endpoint, issue.id)}|#{issue.id}: {escape_text(issue.subject)}>"
    return Notification(
        text=text,
        fields=(
            NotificationField(ASSIGNEE_FIELD, escape_assignee(assignee)),
            NotificationField(STATUS_FIELD, escape_text(issue.status_name)),
        ),
    )
