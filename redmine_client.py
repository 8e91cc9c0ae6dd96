"""Redmine REST API client used to look up issues and accounts."""

from __future__ import annotations

import logging
from typing import Any, Optional, cast

import requests  # type: ignore[import-untyped]

from errors import NotFoundError, TransportError
from models import AccountRef, Issue, TicketingUser

DEFAULT_TIMEOUT_SECONDS = 10

logger = logging.getLogger(__name__)


class RedmineClient:
    def __init__(
        self, endpoint: str, api_key: str, timeout: float = DEFAULT_TIMEOUT_SECONDS
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.headers: dict[str, str] = {
            "Accept": "application/json",
            "X-Redmine-API-Key": api_key,
        }

    def fetch_issue(self, issue_id: int) -> Issue:
        payload = self._get_json(f"/issues/{issue_id}.json", resource="issue", key=issue_id)
        return _map_issue(_require_object(payload, "issue"))

    def fetch_user(self, user_id: int) -> TicketingUser:
        payload = self._get_json(f"/users/{user_id}.json", resource="user", key=user_id)
        return _map_user(_require_object(payload, "user"))

    def _get_json(self, path: str, *, resource: str, key: int) -> dict[str, Any]:
        url = f"{self.endpoint}{path}"
        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error(
                "redmine_request_failed",
                extra={"resource": resource, "id": key, "error": str(exc)},
            )
            raise TransportError(f"Redmine request for {resource} {key} failed: {exc}") from exc

        if response.status_code == 404:
            logger.info("redmine_not_found", extra={"resource": resource, "id": key})
            raise NotFoundError(f"Redmine {resource} {key} not found")
        if response.status_code != 200:
            logger.error(
                "redmine_error_response",
                extra={
                    "resource": resource,
                    "id": key,
                    "status": response.status_code,
                    "body": response.text,
                },
            )
            raise TransportError(f"Redmine error {response.status_code} for {resource} {key}")

        try:
            payload_obj = response.json()
        except ValueError as exc:
            logger.error("redmine_invalid_json", extra={"resource": resource, "error": str(exc)})
            raise TransportError(f"Invalid response from Redmine for {resource} {key}") from exc

        if not isinstance(payload_obj, dict):
            logger.error(
                "redmine_unexpected_format",
                extra={"resource": resource, "body_type": type(payload_obj).__name__},
            )
            raise TransportError(f"Unexpected response format from Redmine for {resource} {key}")
        return cast(dict[str, Any], payload_obj)


def _require_object(payload: dict[str, Any], name: str) -> dict[str, Any]:
    value = payload.get(name)
    if not isinstance(value, dict):
        raise TransportError(f"Redmine response has no '{name}' object")
    return cast(dict[str, Any], value)


def _map_issue(issue: dict[str, Any]) -> Issue:
    status = issue.get("status") or {}
    try:
        return Issue(
            id=int(issue["id"]),
            subject=str(issue.get("subject") or ""),
            status_name=str(status.get("name") or "") if isinstance(status, dict) else "",
            assignee=_map_account_ref(issue.get("assigned_to")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TransportError(f"Malformed Redmine issue: {exc}") from exc


def _map_account_ref(value: Any) -> Optional[AccountRef]:
    if not isinstance(value, dict) or "id" not in value:
        return None
    return AccountRef(id=int(value["id"]), display_name=str(value.get("name") or ""))


def _map_user(user: dict[str, Any]) -> TicketingUser:
    try:
        return TicketingUser(
            id=int(user["id"]),
            login=str(user.get("login") or ""),
            first_name=str(user.get("firstname") or ""),
            last_name=str(user.get("lastname") or ""),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TransportError(f"Malformed Redmine user: {exc}") from exc
