"""Match Redmine accounts to Slack accounts and build the assignee token.

The two directories share no key, so matching is heuristic: login/handle
equality, then the four orderings of first and last name against the Slack
real name, then the administrator's alias table for everything else.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from errors import LookupFailure
from models import AccountRef, AliasTable, ChatUser, TicketingUser
from ports import ChatDirectory, TicketingUserSource

logger = logging.getLogger(__name__)

IDEOGRAPHIC_SPACE = "　"
BROADCAST_MARKERS = {
    "channel": "<!channel>",
    "here": "<!here>",
    "everyone": "<!everyone>",
}


def normalize_real_name(name: str) -> str:
    return name.replace(IDEOGRAPHIC_SPACE, " ")


def name_variants(user: TicketingUser) -> set[str]:
    first, last = user.first_name, user.last_name
    return {last + first, f"{last} {first}", first + last, f"{first} {last}"}


def is_same_user(
    ticketing_user: TicketingUser, chat_user: ChatUser, aliases: Optional[AliasTable] = None
) -> bool:
    """Return True when both records plausibly belong to the same person."""
    return _matches(ticketing_user, chat_user, aliases or {}, alias_budget=1)


def _matches(
    ticketing_user: TicketingUser, chat_user: ChatUser, aliases: AliasTable, *, alias_budget: int
) -> bool:
    if ticketing_user.login == chat_user.handle:
        return True
    if normalize_real_name(chat_user.real_name) in name_variants(ticketing_user):
        return True
    if alias_budget <= 0:
        return False

    mapped = aliases.get(chat_user.real_name)
    if mapped is None:
        mapped = aliases.get(normalize_real_name(chat_user.real_name))
    if mapped is None:
        return False
    # A self-mapping or cycle stops here: one substitution per attempt.
    return _matches(
        ticketing_user,
        replace(chat_user, real_name=mapped),
        aliases,
        alias_budget=alias_budget - 1,
    )


def mention(chat_user_id: str) -> str:
    return f"<@{chat_user_id}>"


def broadcast_marker(name: str) -> Optional[str]:
    return BROADCAST_MARKERS.get(name.strip().lstrip("@").lower())


def resolve_assignee(
    assignee: Optional[AccountRef],
    users: TicketingUserSource,
    directory: ChatDirectory,
    aliases: Optional[AliasTable] = None,
) -> str:
    """Return the best display token for an issue's assignee.

    Never raises on lookup problems: it degrades from a Slack mention to the
    Redmine login, and from there to the (aliased) display name.
    """
    if assignee is None:
        return ""
    aliases = aliases or {}

    fallback = aliases.get(assignee.display_name, assignee.display_name)

    try:
        ticketing_user = users.fetch_user(assignee.id)
    except LookupFailure as exc:
        logger.warning(
            "assignee_user_lookup_failed",
            extra={"account_id": assignee.id, "error": str(exc)},
        )
        return broadcast_marker(fallback) or fallback

    login = aliases.get(ticketing_user.login, ticketing_user.login)
    if login != ticketing_user.login:
        ticketing_user = replace(ticketing_user, login=login)

    try:
        chat_users = directory.list_users()
    except LookupFailure as exc:
        logger.warning("chat_directory_lookup_failed", extra={"login": login, "error": str(exc)})
        return login

    for chat_user in chat_users:
        if is_same_user(ticketing_user, chat_user, aliases):
            logger.debug("assignee_matched", extra={"login": login, "chat_user": chat_user.id})
            return mention(chat_user.id)

    logger.info("assignee_unmatched", extra={"login": login, "directory_size": len(chat_users)})
    return login
