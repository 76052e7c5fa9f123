import json

import pytest

from asana_link_bot.event import (
    EventError,
    extract_event_context,
    load_event_payload,
)


def test_pull_request_opened():
    payload = {
        "action": "opened",
        "pull_request": {
            "html_url": "https://github.com/o/r/pull/1",
            "body": "https://app.asana.com/0/1/2",
        },
        "sender": {"login": "octocat"},
    }
    ctx = extract_event_context(payload)
    assert ctx.kind == "pull_request"
    assert ctx.url == "https://github.com/o/r/pull/1"
    assert ctx.text == "https://app.asana.com/0/1/2"
    assert ctx.previous is None
    assert ctx.actor == "octocat"


def test_pull_request_null_body():
    payload = {"pull_request": {"html_url": "https://github.com/o/r/pull/1", "body": None}}
    ctx = extract_event_context(payload)
    assert ctx.text == ""
    assert ctx.actor is None


def test_pull_request_edited_reads_previous_body():
    payload = {
        "action": "edited",
        "pull_request": {"html_url": "u", "body": "new"},
        "changes": {"body": {"from": "old"}},
    }
    assert extract_event_context(payload).previous == "old"


@pytest.mark.parametrize(
    "changes",
    [None, {}, {"title": {"from": "t"}}, {"body": {}}, {"body": {"from": ""}}],
)
def test_edited_without_previous_body(changes):
    payload = {"action": "edited", "pull_request": {"html_url": "u", "body": "b"}}
    if changes is not None:
        payload["changes"] = changes
    assert extract_event_context(payload).previous is None


def test_previous_ignored_for_non_edit_actions():
    payload = {
        "action": "synchronize",
        "pull_request": {"html_url": "u", "body": "b"},
        "changes": {"body": {"from": "old"}},
    }
    assert extract_event_context(payload).previous is None


def test_issue_comment():
    payload = {
        "action": "created",
        "issue": {"html_url": "https://github.com/o/r/issues/5"},
        "comment": {
            "html_url": "https://github.com/o/r/issues/5#issuecomment-9",
            "body": "see https://app.asana.com/0/1/2",
        },
        "sender": {"login": "hubot"},
    }
    ctx = extract_event_context(payload)
    assert ctx.kind == "issue_comment"
    assert ctx.url == "https://github.com/o/r/issues/5#issuecomment-9"
    assert ctx.text == "see https://app.asana.com/0/1/2"
    assert ctx.actor == "hubot"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"issue": {"html_url": "u"}},
        {"comment": {"html_url": "u", "body": "b"}},
        {"ref": "refs/heads/main", "commits": []},
        {"pull_request": {"body": "no url"}},
    ],
)
def test_unsupported_payload_raises(payload):
    with pytest.raises(EventError):
        extract_event_context(payload)


def test_load_event_payload(tmp_path):
    p = tmp_path / "event.json"
    p.write_text(json.dumps({"action": "opened"}), encoding="utf-8")
    assert load_event_payload(str(p)) == {"action": "opened"}


def test_load_event_payload_errors(tmp_path):
    with pytest.raises(EventError):
        load_event_payload(None)
    with pytest.raises(EventError):
        load_event_payload(str(tmp_path / "missing.json"))
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(EventError):
        load_event_payload(str(bad))


def test_event_name_matches_payload():
    pr = {"pull_request": {"html_url": "u", "body": "b"}}
    assert extract_event_context(pr, "pull_request").kind == "pull_request"
    assert extract_event_context(pr, "pull_request_target").kind == "pull_request"
    comment = {"issue": {"html_url": "i"}, "comment": {"html_url": "c", "body": "b"}}
    assert extract_event_context(comment, "issue_comment").kind == "issue_comment"


@pytest.mark.parametrize(
    "event_name,payload",
    [
        ("push", {"pull_request": {"html_url": "u", "body": "b"}}),
        ("issue_comment", {"pull_request": {"html_url": "u", "body": "b"}}),
        ("pull_request", {"issue": {"html_url": "i"}, "comment": {"html_url": "c"}}),
    ],
)
def test_event_name_mismatch_raises(event_name, payload):
    with pytest.raises(EventError, match=event_name):
        extract_event_context(payload, event_name)
