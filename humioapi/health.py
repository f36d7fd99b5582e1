"""Server health and status reports."""

from __future__ import annotations

import json as _json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .client import Client
from .errors import HTTPStatusError


class StatusValue(str, Enum):
    """Overall status levels reported by the server."""

    OK = "OK"
    WARN = "WARN"
    DOWN = "DOWN"

    def __str__(self) -> str:
        return self.value


def _lookup(data: dict[str, Any], name: str, default: Any = None) -> Any:
    if name in data:
        return data[name]
    lowered = name.lower()
    for key, value in data.items():
        if key.lower() == lowered:
            return value
    return default


def _status_value(raw: Any) -> StatusValue | str:
    text = raw or ""
    try:
        return StatusValue(text)
    except ValueError:
        return text


@dataclass
class HealthCheck:
    """One named health check."""

    name: str
    status: StatusValue | str
    status_message: str = ""
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class Health:
    """Full health report, split by status level."""

    status: StatusValue | str
    status_message: str = ""
    uptime: str = ""
    version: str = ""
    ok: list[HealthCheck] = field(default_factory=list)
    warn: list[HealthCheck] = field(default_factory=list)
    down: list[HealthCheck] = field(default_factory=list)
    raw_json: bytes = field(default=b"", repr=False)

    def checks_map(self) -> dict[str, HealthCheck]:
        """All checks keyed by name."""
        return {check.name: check for check in (*self.ok, *self.warn, *self.down)}

    def json(self) -> bytes:
        """The report exactly as the server sent it."""
        return self.raw_json


@dataclass
class StatusResponse:
    """Short server status."""

    status: str
    version: str = ""

    def is_down(self) -> bool:
        """True unless the status is OK or WARN."""
        return self.status not in ("OK", "WARN")


def _check(data: dict[str, Any]) -> HealthCheck:
    return HealthCheck(
        name=_lookup(data, "name", ""),
        status=_status_value(_lookup(data, "status")),
        status_message=_lookup(data, "statusMessage", ""),
        fields=_lookup(data, "fields") or {},
    )


def _checks(data: dict[str, Any], name: str) -> list[HealthCheck]:
    return [_check(item) for item in _lookup(data, name) or []]


def health_string(client: Client) -> str:
    """Fetch the plain-text health report."""
    return client.http_request("GET", "api/v1/health").text


def health(client: Client) -> Health:
    """Fetch and decode the JSON health report."""
    response = client.http_request("GET", "api/v1/health-json")
    if response.status_code != 200:
        raise HTTPStatusError(
            f"server responded with status code {response.status_code}",
            response.status_code,
            response.text,
        )
    raw = response.content
    data = _json.loads(raw)
    return Health(
        status=_status_value(_lookup(data, "status")),
        status_message=_lookup(data, "statusMessage", ""),
        uptime=_lookup(data, "uptime", ""),
        version=_lookup(data, "version", ""),
        ok=_checks(data, "oks"),
        warn=_checks(data, "warnings"),
        down=_checks(data, "down"),
        raw_json=raw,
    )


def status(client: Client) -> StatusResponse:
    """Fetch the short server status."""
    response = client.http_request("GET", "api/v1/status")
    if response.status_code >= 400:
        raise HTTPStatusError(
            f"error getting server status: {response.status_code} {response.reason}",
            response.status_code,
            response.text,
        )
    data = _json.loads(response.content)
    return StatusResponse(
        status=_lookup(data, "status", ""),
        version=_lookup(data, "version", ""),
    )