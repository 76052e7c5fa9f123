"""
GitHub event payload -> EventContext.

This is the only place that looks inside the raw webhook payload; everything
downstream works on the resolved EventContext.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .config import LinkBotError


class EventError(LinkBotError):
    pass


@dataclass(frozen=True)
class EventContext:
    kind: str
    url: str
    text: str
    previous: str | None
    actor: str | None


def load_event_payload(path: str | None) -> dict[str, Any]:
    if not path:
        raise EventError("GITHUB_EVENT_PATH is not set")
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        raise EventError(f"cannot read event payload {path}: {e}") from e
    if not isinstance(payload, dict):
        raise EventError("event payload must be a JSON object")
    return payload


def _previous_text(payload: dict[str, Any]) -> str | None:
    """Body before the edit, for `edited` actions only."""
    if payload.get("action") != "edited":
        return None
    changes = payload.get("changes") or {}
    body = changes.get("body") if isinstance(changes, dict) else None
    prev = body.get("from") if isinstance(body, dict) else None
    return prev if isinstance(prev, str) and prev else None


def _actor(payload: dict[str, Any]) -> str | None:
    sender = payload.get("sender") or {}
    login = sender.get("login") if isinstance(sender, dict) else None
    return login if isinstance(login, str) and login else None


# GITHUB_EVENT_NAME -> EventContext.kind it must produce
EVENT_KINDS = {
    "pull_request": "pull_request",
    "pull_request_target": "pull_request",
    "issue_comment": "issue_comment",
}


def _context_from_payload(payload: dict[str, Any]) -> EventContext:
    pull_request = payload.get("pull_request")
    issue = payload.get("issue")
    comment = payload.get("comment")
    previous = _previous_text(payload)
    actor = _actor(payload)

    if isinstance(pull_request, dict):
        url = pull_request.get("html_url")
        if not url:
            raise EventError("pull_request payload has no html_url")
        return EventContext(
            kind="pull_request",
            url=url,
            text=pull_request.get("body") or "",
            previous=previous,
            actor=actor,
        )
    if isinstance(issue, dict) and isinstance(comment, dict):
        url = comment.get("html_url")
        if not url:
            raise EventError("comment payload has no html_url")
        return EventContext(
            kind="issue_comment",
            url=url,
            text=comment.get("body") or "",
            previous=previous,
            actor=actor,
        )

    raise EventError("Must be used on pull_request and issue_comment events only")


def extract_event_context(payload: dict[str, Any], event_name: str | None = None) -> EventContext:
    """Resolve url/text/previous/actor from a pull_request or issue_comment payload.

    When the runner's event name is known it must agree with the payload shape.
    Raises EventError for any other payload shape.
    """
    if event_name and event_name not in EVENT_KINDS:
        raise EventError(
            f"Must be used on pull_request and issue_comment events only (got {event_name})"
        )
    ctx = _context_from_payload(payload)
    if event_name and EVENT_KINDS[event_name] != ctx.kind:
        raise EventError(f"{event_name} event carries a {ctx.kind} payload")
    return ctx
