"""Alert management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

from .client import Client
from .errors import HumioError, alert_not_found

_ALERT_FIELDS = (
    "id name queryString queryStart throttleField timeOfLastTrigger isStarred "
    "description throttleTimeMillis enabled actions labels lastError"
)

_INPUT_PARAMS = (
    "$viewName: String!, $alertName: String!, $description: String!, "
    "$queryString: String!, $queryStart: String!, $throttleTimeMillis: Long!, "
    "$throttleField: String, $enabled: Boolean!, $actions: [String!]!, "
    "$labels: [String!]!"
)

_INPUT_FIELDS = (
    "viewName: $viewName, name: $alertName, description: $description, "
    "queryString: $queryString, queryStart: $queryStart, "
    "throttleTimeMillis: $throttleTimeMillis, throttleField: $throttleField, "
    "enabled: $enabled, actions: $actions, labels: $labels"
)


@dataclass
class Alert:
    """An alert defined in a view."""

    id: str = ""
    name: str = ""
    query_string: str = ""
    query_start: str = ""
    throttle_field: str = ""
    time_of_last_trigger: int = 0
    is_starred: bool = False
    description: str = ""
    throttle_time_millis: int = 0
    enabled: bool = False
    actions: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    last_error: str = ""


def _alert(data: dict[str, Any] | None) -> Alert:
    data = data or {}
    return Alert(
        id=data.get("id") or "",
        name=data.get("name") or "",
        query_string=data.get("queryString") or "",
        query_start=data.get("queryStart") or "",
        throttle_field=data.get("throttleField") or "",
        time_of_last_trigger=data.get("timeOfLastTrigger") or 0,
        is_starred=bool(data.get("isStarred")),
        description=data.get("description") or "",
        throttle_time_millis=data.get("throttleTimeMillis") or 0,
        enabled=bool(data.get("enabled")),
        actions=list(data.get("actions") or []),
        labels=list(data.get("labels") or []),
        last_error=data.get("lastError") or "",
    )


def _input_variables(view_name: str, alert: Alert) -> dict[str, Any]:
    return {
        "viewName": view_name,
        "alertName": alert.name,
        "description": alert.description,
        "queryString": alert.query_string,
        "queryStart": alert.query_start,
        "throttleTimeMillis": int(alert.throttle_time_millis),
        "throttleField": alert.throttle_field or None,
        "enabled": bool(alert.enabled),
        "actions": list(alert.actions),
        "labels": list(alert.labels),
    }


class Alerts:
    """Lists, creates, updates and deletes alerts."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def list(self, view_name: str) -> list[Alert]:
        """All alerts in a view."""
        data = self.client.query(
            "query($viewName: String!) { searchDomain(name: $viewName) "
            f"{{ alerts {{ {_ALERT_FIELDS} }} }} }}",
            {"viewName": view_name},
        )
        domain = data.get("searchDomain") or {}
        return [_alert(item) for item in domain.get("alerts") or []]

    def _list_for_lookup(self, view_name: str) -> list[Alert]:
        try:
            return self.list(view_name)
        except (HumioError, requests.RequestException) as err:
            raise HumioError(f"unable to list alerts: {err}") from err

    def update(self, view_name: str, new_alert: Alert | None) -> Alert:
        """Replace the alert with the ID of ``new_alert``."""
        if new_alert is None:
            raise ValueError("newAlert must not be nil")
        if not new_alert.id:
            raise ValueError("newAlert must have non-empty newAlert id")
        variables = _input_variables(view_name, new_alert)
        variables["id"] = new_alert.id
        data = self.client.mutate(
            f"mutation($id: String!, {_INPUT_PARAMS}) "
            f"{{ updateAlert(input: {{ id: $id, {_INPUT_FIELDS} }}) "
            f"{{ {_ALERT_FIELDS} }} }}",
            variables,
        )
        return _alert(data.get("updateAlert"))

    def add(self, view_name: str, new_alert: Alert | None) -> Alert:
        """Create an alert and return it as stored by the server."""
        if new_alert is None:
            raise ValueError("newAlert must not be nil")
        data = self.client.mutate(
            f"mutation({_INPUT_PARAMS}) "
            f"{{ createAlert(input: {{ {_INPUT_FIELDS} }}) {{ {_ALERT_FIELDS} }} }}",
            _input_variables(view_name, new_alert),
        )
        return _alert(data.get("createAlert"))

    def get(self, view_name: str, alert_name: str) -> Alert:
        """The alert with this name."""
        for alert in self._list_for_lookup(view_name):
            if alert.name == alert_name:
                return alert
        raise alert_not_found(alert_name)

    def delete(self, view_name: str, alert_name: str) -> None:
        """Delete the alert with this name."""
        alert_id = next(
            (
                alert.id
                for alert in self._list_for_lookup(view_name)
                if alert.name == alert_name
            ),
            "",
        )
        if not alert_id:
            raise HumioError("unable to find alert")
        self.client.mutate(
            "mutation($viewName: String!, $alertId: String!) "
            "{ deleteAlert(input: { viewName: $viewName, id: $alertId }) }",
            {"viewName": view_name, "alertId": alert_id},
        )