"""
Minimal Asana API client (1.0) using stdlib urllib.
"""

from __future__ import annotations

import json
import urllib.parse
import urllib.request
from typing import Any


class AsanaClient:
    def __init__(self, base_url: str, access_token: str, timeout: int = 10) -> None:
        self.base_api = base_url.rstrip("/") + "/api/1.0"
        self.access_token = access_token
        self.timeout = timeout

    # ----- Helpers -----
    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": "AsanaLinkBot/1.0",
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            # gids as strings, never JSON numbers
            "Asana-Enable": "string_ids",
        }

    def _post_json(self, path: str, data: dict[str, Any]) -> Any:
        body = json.dumps({"data": data}).encode("utf-8")
        req = urllib.request.Request(
            self.base_api + path, data=body, headers=self._headers(), method="POST"
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # nosec B310
            raw = resp.read()
        if not raw:
            return {}
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            return {}
        return data.get("data") or {}

    # ----- Public APIs -----
    def add_comment(self, task_gid: str, text: str) -> dict[str, Any]:
        """Append a comment story to the task; returns the created story."""
        return self._post_json(f"/tasks/{urllib.parse.quote(task_gid)}/stories", {"text": text})
