"""
Asana Link Bot (GitHub Actions step)

Where: GitHub Actions job on pull_request / issue_comment events.
What:  Find Asana task links in the PR body or comment, post a back-reference on each new task.
Why:   Keep Asana tasks pointing at the GitHub discussion without manual copy/paste.
"""

__all__ = [
    "asana",
    "config",
    "event",
    "handler",
    "refs",
    "credentials",
]
