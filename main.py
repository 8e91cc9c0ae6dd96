# main.py
"""Slack relay bot entry point: posts Redmine issue details for ``#123`` references."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

import config
from alias_table import load_alias_table
from logging_utils import configure_logging
from models import MessageEvent
from pipeline import NotificationPipeline
from redmine_client import RedmineClient
from slack_transport import SlackTransport

logger = logging.getLogger(__name__)

IGNORED_SUBTYPES = {"bot_message", "message_changed", "message_deleted"}


def to_message_event(event: dict[str, Any]) -> Optional[MessageEvent]:
    if event.get("subtype") in IGNORED_SUBTYPES:
        return None
    return MessageEvent(
        sender_id=event.get("user") or "",
        channel_id=event.get("channel") or "",
        text=event.get("text") or "",
    )


def build_message_listener(pipeline: NotificationPipeline) -> Callable[[dict[str, Any]], None]:
    def handle_message_events(event: dict[str, Any]) -> None:
        message = to_message_event(event)
        if message is None:
            return
        try:
            outcome = pipeline.handle(message)
        except Exception as exc:  # pragma: no cover - keep the listener alive
            logger.exception(
                "pipeline_crashed", extra={"channel": message.channel_id, "error": str(exc)}
            )
            return
        logger.debug(
            "message_handled", extra={"channel": message.channel_id, "outcome": outcome.value}
        )

    return handle_message_events


def create_app() -> App:
    app = App(token=config.get_slack_bot_token())
    redmine = RedmineClient(
        config.get_redmine_endpoint(),
        config.get_redmine_api_key(),
        timeout=config.get_redmine_timeout(),
    )
    slack = SlackTransport(app.client, field_titles=config.get_field_titles())
    pipeline = NotificationPipeline(
        issues=redmine,
        users=redmine,
        directory=slack,
        poster=slack,
        aliases=load_alias_table(config.get_alias_path()),
        endpoint=config.get_redmine_endpoint(),
        notify_channel=config.get_notify_channel(),
    )
    app.event("message")(build_message_listener(pipeline))
    return app


def main() -> None:
    configure_logging(config.get_log_level(), config.is_log_json_enabled())
    handler = SocketModeHandler(create_app(), config.get_slack_app_token())
    logger.info("listening")
    try:
        handler.start()
    except KeyboardInterrupt:
        logger.info("shutting_down")
        handler.close()


if __name__ == "__main__":
    main()
