"""
GitHub Actions entry point: event -> Asana back-reference comments.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from collections.abc import Iterable
from typing import Any

from . import refs
from .asana import AsanaClient
from .config import LinkBotError, Settings, load_settings
from .credentials import resolve_asana_pat
from .event import EventContext, extract_event_context, load_event_payload

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)
    root = logging.getLogger()
    if not root.handlers:
        # Actions captures stdout; no timestamps, the runner adds its own
        logging.basicConfig(stream=sys.stdout, format="%(levelname)s %(message)s")
    if root.level and root.level > level:
        root.setLevel(level)


def _log(msg: str, **fields: Any) -> None:
    try:
        rec = {"msg": msg, **fields}
        logger.info(json.dumps(rec, ensure_ascii=False))
    except Exception:
        # Fallback to plain log
        logger.info("%s | %s", msg, fields)


def _result(status: str, notified: list[str], error: str | None = None) -> dict[str, Any]:
    return {"status": status, "notified": notified, "error": error}


def comment_text(ctx: EventContext, prefix: str | None) -> str:
    if not prefix:
        prefix = f"{ctx.actor} referenced in: " if ctx.actor else "Referenced in: "
    return f"{prefix}{ctx.url}"


def notify(
    client: AsanaClient,
    task_ids: Iterable[str],
    comment: str,
    done: list[str] | None = None,
) -> list[str]:
    """Post `comment` on each task in turn; the first failure aborts the rest.

    Successfully notified ids are appended to `done` as they complete, so a
    caller still knows what went out when an exception escapes.
    """
    if done is None:
        done = []
    for task_id in task_ids:
        client.add_comment(task_id, comment)
        _log("comment_added", taskId=task_id)
        done.append(task_id)
    return done


def handle_event(payload: dict[str, Any], settings: Settings) -> dict[str, Any]:
    start_ts = time.time()
    notified: list[str] = []
    try:
        # 1) Token and event shape are checked before anything touches Asana
        pat = resolve_asana_pat(settings)
        ctx = extract_event_context(payload, settings.event_name)
        _log(
            "event_context",
            kind=ctx.kind,
            url=ctx.url,
            action=payload.get("action"),
            hasPrevious=ctx.previous is not None,
        )

        # 2) Only links added by this event
        task_ids = refs.new_task_ids(ctx.text, ctx.previous)
        if not task_ids:
            _log("no_tasks_referenced", url=ctx.url)
            return _result("ok", notified)

        # 3) One comment per task
        client = AsanaClient(settings.asana_base_url, pat, settings.asana_timeout_seconds)
        comment = comment_text(ctx, settings.comment_prefix)
        notify(client, sorted(task_ids), comment, done=notified)
    except LinkBotError as e:
        logger.exception("Configuration error")
        _log("config_error", error=str(e))
        return _result("error", notified, str(e))
    except (OSError, ValueError) as e:  # urllib errors are OSError subclasses
        logger.exception("Asana call failed")
        _log("asana_error", error=str(e), notified=notified)
        return _result("error", notified, f"asana call failed: {e}")
    except Exception as e:
        # http.client.HTTPException and anything else raised mid-call
        logger.exception("Unexpected failure")
        _log("asana_error", error=repr(e), notified=notified)
        return _result("error", notified, f"unexpected failure: {e!r}")

    _log(
        "done",
        url=ctx.url,
        notified=notified,
        ms_total=int((time.time() - start_ts) * 1000),
    )
    return _result("ok", notified)


def main() -> int:
    _configure_logging()
    try:
        settings = load_settings()
    except LinkBotError as e:
        logger.exception("Configuration error")
        _log("config_error", error=str(e))
        return 1

    try:
        payload = load_event_payload(settings.event_path)
    except LinkBotError as e:
        logger.exception("Configuration error")
        _log("config_error", error=str(e))
        res = _result("error", [], str(e))
    else:
        res = handle_event(payload, settings)

    if res["status"] == "ok":
        return 0
    # FAIL_ON_ERROR=false keeps the job green and leaves the failure in the log only
    return 1 if settings.fail_on_error else 0
