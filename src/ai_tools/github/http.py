from __future__ import annotations

import json
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Dict, Optional

from ai_tools.core.types import JSON


@dataclass(frozen=True)
class HttpResult:
    status: int
    body: JSON
    raw_text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def get_json(
    *,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout_s: float = 30.0,
) -> HttpResult:
    """GETs a JSON document. HTTP errors come back as a result; network errors raise URLError."""
    req = urllib.request.Request(url=url, method="GET")

    if headers:
        for k, v in headers.items():
            req.add_header(k, v)

    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
            return HttpResult(status=resp.status, body=_decode(raw), raw_text=raw)
    except urllib.error.HTTPError as e:
        raw = e.read().decode("utf-8", errors="replace") if e.fp else ""
        return HttpResult(status=int(e.code), body=_decode(raw), raw_text=raw)


def _decode(raw: str) -> JSON:
    if not raw.strip():
        return {}
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError:
        return {"raw": raw}
    return obj if isinstance(obj, dict) else {"raw": obj}
