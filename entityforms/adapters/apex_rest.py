"""REST adapters for record and greeting endpoints exposed through Apex REST.

Endpoints (relative to the org instance URL):
    - ``GET  /services/apexrest/<resource>``: list records as a JSON array.
    - ``POST /services/apexrest/<resource>``: create a record from a JSON body.
    - ``GET  /services/apexrest/<greeting>?name=...``: greeting string.
"""

from __future__ import annotations

from typing import Any, List, Optional

import requests

from entityforms.domain.ports import EntityServicePort, GreetingPort, Record

from .api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    extract_error_code,
    first_string,
    parse_error_payload,
)
from .http_client import HttpConfig, RetryingSession

APEX_REST_PREFIX = "/services/apexrest"


class _ApexRestBase:
    def __init__(
        self,
        instance_url: str,
        *,
        access_token: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        base = (instance_url or "").strip()
        if not base:
            raise ValueError(f"{type(self).__name__} requires an instance URL")
        self.instance_url = base.rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(access_token or None, self.cfg)

    def _make_url(self, resource: str) -> str:
        return f"{self.instance_url}{APEX_REST_PREFIX}/{resource.strip('/')}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        detail = first_string(payload)
        if 400 <= status < 500:
            raise ApiClientError(
                message,
                status=status,
                code=extract_error_code(payload),
                detail=detail,
                payload=payload,
                context=ctx,
            )
        if 500 <= status < 600:
            raise ApiServerError(
                message,
                status=status,
                detail=detail,
                payload=payload,
                context=ctx,
            )
        raise ApiError(message, status=status, detail=detail, payload=payload, context=ctx)

    @staticmethod
    def _json_any(resp: requests.Response, ctx: str) -> Any:
        try:
            return resp.json()
        except Exception:
            snippet = (getattr(resp, "text", "") or "")[:400]
            raise ApiError(f"{ctx}: invalid JSON response: {snippet}", context=ctx) from None


class ApexRestEntityAdapter(_ApexRestBase, EntityServicePort):
    """List/create adapter for one Apex REST record resource."""

    def __init__(
        self,
        instance_url: str,
        resource: str,
        *,
        access_token: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        super().__init__(
            instance_url,
            access_token=access_token,
            request_timeout_s=request_timeout_s,
            retries=retries,
        )
        if not (resource or "").strip("/ "):
            raise ValueError("ApexRestEntityAdapter requires a resource name")
        self.resource = resource.strip("/ ")

    def list_records(self) -> List[Record]:
        ctx = f"list[{self.resource}]"
        resp = self.session.get(self._make_url(self.resource))
        self._ensure_ok(resp, ctx)
        data = self._json_any(resp, ctx)
        if not isinstance(data, list):
            raise ApiError(f"{ctx}: expected list response", context=ctx)
        return [entry for entry in data if isinstance(entry, dict)]

    def create_record(self, payload: Record) -> Optional[Record]:
        ctx = f"create[{self.resource}]"
        resp = self.session.post(self._make_url(self.resource), json_body=dict(payload))
        self._ensure_ok(resp, ctx)
        if not (getattr(resp, "text", "") or "").strip():
            return None
        data = self._json_any(resp, ctx)
        return data if isinstance(data, dict) else None


class ApexRestGreetingAdapter(_ApexRestBase, GreetingPort):
    """Adapter for the greeting endpoint."""

    def __init__(
        self,
        instance_url: str,
        resource: str = "hello",
        *,
        access_token: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        super().__init__(
            instance_url,
            access_token=access_token,
            request_timeout_s=request_timeout_s,
            retries=retries,
        )
        self.resource = (resource or "hello").strip("/ ")

    def echo(self, name: str) -> str:
        ctx = f"echo[{self.resource}]"
        resp = self.session.get(self._make_url(self.resource), params={"name": name})
        self._ensure_ok(resp, ctx)
        try:
            data = resp.json()
        except Exception:
            # Plain-text greetings are accepted as-is.
            return resp.text
        if isinstance(data, str):
            return data
        message = first_string(data)
        if message is None:
            raise ApiError(f"{ctx}: expected string response", context=ctx)
        return message


__all__ = ["APEX_REST_PREFIX", "ApexRestEntityAdapter", "ApexRestGreetingAdapter"]
