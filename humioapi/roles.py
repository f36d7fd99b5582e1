"""Role management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

from .client import Client
from .errors import HumioError

_ROLE_FIELDS = (
    "id displayName color description viewPermissions systemPermissions "
    "organizationPermissions"
)


@dataclass
class Role:
    """A role and the permissions it grants."""

    id: str = ""
    display_name: str = ""
    color: str = ""
    description: str = ""
    view_permissions: list[str] = field(default_factory=list)
    system_permissions: list[str] = field(default_factory=list)
    org_permissions: list[str] = field(default_factory=list)


def _role(data: dict[str, Any] | None) -> Role:
    data = data or {}
    return Role(
        id=data.get("id") or "",
        display_name=data.get("displayName") or "",
        color=data.get("color") or "",
        description=data.get("description") or "",
        view_permissions=list(data.get("viewPermissions") or []),
        system_permissions=list(data.get("systemPermissions") or []),
        org_permissions=list(data.get("organizationPermissions") or []),
    )


class Roles:
    """Lists, creates, updates and removes roles."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def list(self) -> list[Role]:
        """All roles; an empty list if they cannot be fetched."""
        try:
            data = self.client.query(f"{{ roles {{ {_ROLE_FIELDS} }} }}")
        except (HumioError, requests.RequestException, ValueError):
            return []
        return [_role(item) for item in data.get("roles") or []]

    def create(self, role: Role) -> None:
        """Create a role."""
        self.client.mutate(
            "mutation($displayName: String!, $color: String!, "
            "$viewPermissions: [String!]!, $systemPermissions: [String!]!, "
            "$orgPermissions: [String!]!) { createRole(input: {displayName: $displayName, "
            "viewPermissions: $viewPermissions, color: $color, "
            "systemPermissions: $systemPermissions, organizationPermissions: $orgPermissions}) "
            f"{{ {_ROLE_FIELDS} }} }}",
            {
                "displayName": role.display_name,
                "color": role.color,
                "viewPermissions": list(role.view_permissions),
                "systemPermissions": list(role.system_permissions),
                "orgPermissions": list(role.org_permissions),
            },
        )

    def update(self, rolename: str, new_role: Role | None) -> None:
        """Replace the attributes of the role named ``rolename``."""
        role_id = self.get_role_id(rolename)
        if not role_id:
            raise HumioError("unable to find role")
        if new_role is None:
            raise ValueError("new role values must not be nil")
        self.client.mutate(
            "mutation($roleId: String!, $displayName: String!, $color: String!, "
            "$description: String!, $viewPermissions: [String!]!, "
            "$systemPermissions: [String!]!, $orgPermissions: [String!]!) { "
            "updateRole(input: {roleId: $roleId, displayName: $displayName, color: $color, "
            "description: $description, viewPermissions: $viewPermissions, "
            "systemPermissions: $systemPermissions, organizationPermissions: $orgPermissions}) "
            f"{{ {_ROLE_FIELDS} }} }}",
            {
                "roleId": role_id,
                "displayName": new_role.display_name,
                "color": new_role.color,
                "description": new_role.description,
                "viewPermissions": list(new_role.view_permissions),
                "systemPermissions": list(new_role.system_permissions),
                "orgPermissions": list(new_role.org_permissions),
            },
        )

    def remove_role(self, rolename: str) -> None:
        """Delete the role named ``rolename``."""
        role = self.get(rolename)
        self.client.mutate(
            "mutation($roleId: String!) { removeRole(input: {roleId: $roleId}) "
            "{ __typename } }",
            {"roleId": role.id},
        )

    def get(self, rolename: str) -> Role:
        """The role named ``rolename``."""
        role_id = self.get_role_id(rolename)
        if not role_id:
            raise HumioError("unable to get role id")
        data = self.client.query(
            f"query($roleId: String!) {{ role(roleId: $roleId) {{ {_ROLE_FIELDS} }} }}",
            {"roleId": role_id},
        )
        return _role(data.get("role"))

    def get_role_id(self, rolename: str) -> str:
        """ID of the role with this display name, or an empty string."""
        return next(
            (role.id for role in self.list() if role.display_name == rolename), ""
        )