"""Bearer-token ``requests`` session used by the Apex REST adapters.

Only transport failures are retried. A response with any status code is
returned to the adapter, which decides how to map it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from entityforms.adapters.api_errors import ApiTimeoutError

_RETRYABLE = (req_exc.Timeout, req_exc.ConnectionError)


@dataclass
class HttpConfig:
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """``requests.Session`` with the org's access token and a retry budget.

    ``session`` is the underlying ``requests.Session``; tests swap it for a
    stub exposing ``get``/``post``.
    """

    def __init__(self, access_token: Optional[str], cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.access_token = access_token
        self.cfg = cfg

    def get(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self._request("GET", url, params=params)

    def post(self, url: str, *, json_body: Optional[Dict[str, Any]] = None) -> requests.Response:
        """POST ``json_body`` serialized as JSON (no body when ``None``)."""
        if json_body is None:
            return self._request("POST", url)
        return self._request(
            "POST",
            url,
            data=json.dumps(json_body, allow_nan=False),
            content_type="application/json",
        )

    def _request(
        self,
        method: str,
        url: str,
        *,
        content_type: Optional[str] = None,
        **kwargs: Any,
    ) -> requests.Response:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if content_type:
            headers["Content-Type"] = content_type

        send = getattr(self.session, method.lower())
        for attempt in range(1, self.cfg.retries + 2):
            try:
                return send(url, headers=headers, timeout=self.cfg.request_timeout_s, **kwargs)
            except _RETRYABLE as exc:
                last = exc
        raise ApiTimeoutError(
            f"{method} {url}: no response after {attempt} attempt(s) ({last})",
            context=f"{method} {url}",
        ) from last


__all__ = ["HttpConfig", "RetryingSession"]
