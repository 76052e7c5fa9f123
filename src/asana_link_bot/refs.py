"""
Asana task link extraction and edit-aware diffing.
"""

from __future__ import annotations

import re

# Accepted link forms, each ending in the task gid:
#   /{workspace}/{project}/project/{subproject}/task/{task}
#   /{workspace}/project/{project}/task/{task}
#   /{workspace}/home/{project}/{task}
#   /{workspace}/{project}/{task}
TASK_LINK_RE = re.compile(
    r"https?://app\.asana\.com/"
    r"(?:"
    r"\d+/\d+/project/\d+/task/(?P<nested>\d+)"
    r"|\d+/project/\d+/task/(?P<project_task>\d+)"
    r"|\d+/home/\d+/(?P<home>\d+)"
    r"|\d+/\d+/(?P<task_id>\d+)"
    r")",
    re.IGNORECASE,
)


def extract_task_ids(text: str | None) -> set[str]:
    """Return every Asana task gid linked from `text`.

    Ids stay strings: gids exceed 2**53 and may not round-trip through numbers.
    """
    if not text:
        return set()
    ids: set[str] = set()
    for m in TASK_LINK_RE.finditer(text):
        # exactly one alternative matched; the other groups are None
        ids.add(next(g for g in m.groups() if g))
    return ids


def new_task_ids(current: str | None, previous: str | None = None) -> set[str]:
    """Task ids linked from `current` that were not already linked from `previous`."""
    before = extract_task_ids(previous) if previous else set()
    return extract_task_ids(current) - before
