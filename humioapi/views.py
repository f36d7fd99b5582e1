"""View management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .client import Client


@dataclass
class ViewConnection:
    """A repository a view reads from and the filter applied to it."""

    repo_name: str = ""
    filter: str = ""


@dataclass
class View:
    """A view and its repository connections."""

    name: str = ""
    description: str = ""
    connections: list[ViewConnection] = field(default_factory=list)


@dataclass
class ViewListItem:
    """Summary of a view or repository as listed."""

    name: str = ""


def _connection_inputs(connections: Mapping[str, str]) -> list[dict[str, str]]:
    return [
        {"repositoryName": repo_name, "filter": query_filter}
        for repo_name, query_filter in connections.items()
    ]


def _connection(data: dict[str, Any]) -> ViewConnection:
    repository = data.get("repository") or {}
    return ViewConnection(
        repo_name=repository.get("name") or "",
        filter=data.get("filter") or "",
    )


class Views:
    """Lists, creates, updates and deletes views."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get(self, name: str) -> View:
        """The view with this name."""
        data = self.client.query(
            "query($name: String!) { searchDomain(name: $name) { name description "
            "... on View { connections { repository { name } filter } } } }",
            {"name": name},
        )
        domain = data.get("searchDomain") or {}
        return View(
            name=domain.get("name") or "",
            description=domain.get("description") or "",
            connections=[_connection(item) for item in domain.get("connections") or []],
        )

    def list(self) -> list[ViewListItem]:
        """All views and repositories, sorted by name ignoring case."""
        data = self.client.query("{ searchDomains { name } }")
        items = [
            ViewListItem(name=item.get("name") or "")
            for item in data.get("searchDomains") or []
        ]
        return sorted(items, key=lambda item: item.name.lower())

    def create(
        self, name: str, description: str, connections: Mapping[str, str]
    ) -> None:
        """Create a view reading from repositories mapped to their filters."""
        self.client.mutate(
            "mutation($name: String!, $description: String!, "
            "$connections: [ViewConnectionInput!]) { createView(name: $name, "
            "description: $description, connections: $connections) "
            "{ name description } }",
            {
                "name": name,
                "description": description,
                "connections": _connection_inputs(connections),
            },
        )

    def delete(self, name: str, reason: str) -> None:
        """Delete a view."""
        self.client.mutate(
            "mutation($name: String!, $reason: String!) "
            "{ deleteSearchDomain(name: $name, deleteMessage: $reason) { __typename } }",
            {"name": name, "reason": reason},
        )

    def update_connections(self, name: str, connections: Mapping[str, str]) -> None:
        """Replace the repository connections of a view."""
        self.client.mutate(
            "mutation($viewName: String!, $connections: [ViewConnectionInput!]) "
            "{ updateView(viewName: $viewName, connections: $connections) { name } }",
            {"viewName": name, "connections": _connection_inputs(connections)},
        )

    def update_description(self, name: str, description: str) -> None:
        """Replace the description of a view."""
        self.client.mutate(
            "mutation($name: String!, $description: String!) "
            "{ updateDescriptionForSearchDomain(name: $name, "
            "newDescription: $description) { __typename } }",
            {"name": name, "description": description},
        )