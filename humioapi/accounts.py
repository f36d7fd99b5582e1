"""Users, groups, organizations and the authenticated viewer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .client import Client
from .errors import HumioError

_USER_FIELDS = "id username fullName email company countryCode picture isRoot createdAt"

_USER_INPUT_PARAMS = (
    "$username: String!, $company: String, $isRoot: Boolean, $fullName: String, "
    "$picture: String, $email: String, $countryCode: String"
)
_USER_INPUT = (
    "{username: $username, company: $company, isRoot: $isRoot, fullName: $fullName, "
    "picture: $picture, email: $email, countryCode: $countryCode}"
)


class UserNotFoundError(HumioError, LookupError):
    """The requested user does not exist or was not found where expected."""

    def __init__(self, message: str = "user not found") -> None:
        super().__init__(message)


@dataclass
class User:
    """A user account."""

    id: str = ""
    username: str = ""
    full_name: str = ""
    email: str = ""
    company: str = ""
    country_code: str = ""
    picture: str = ""
    is_root: bool = False
    created_at: str = ""


@dataclass
class UserChangeSet:
    """Optional user attributes; ``None`` leaves an attribute unset."""

    is_root: bool | None = None
    full_name: str | None = None
    company: str | None = None
    country_code: str | None = None
    picture: str | None = None
    email: str | None = None


def _user(data: dict[str, Any] | None) -> User:
    data = data or {}
    return User(
        id=data.get("id") or "",
        username=data.get("username") or "",
        full_name=data.get("fullName") or "",
        email=data.get("email") or "",
        company=data.get("company") or "",
        country_code=data.get("countryCode") or "",
        picture=data.get("picture") or "",
        is_root=bool(data.get("isRoot")),
        created_at=data.get("createdAt") or "",
    )


def _changeset_variables(username: str, changeset: UserChangeSet) -> dict[str, Any]:
    return {
        "username": username,
        "isRoot": changeset.is_root,
        "fullName": changeset.full_name,
        "company": changeset.company,
        "countryCode": changeset.country_code,
        "email": changeset.email,
        "picture": changeset.picture,
    }


class Users:
    """Manages user accounts."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def list(self) -> list[User]:
        """All users."""
        data = self.client.query(f"{{ users {{ {_USER_FIELDS} }} }}")
        return [_user(item) for item in data.get("users") or []]

    def get(self, username: str) -> User:
        """The user with exactly this username."""
        data = self.client.query(
            f"query($username: String!) {{ users(search: $username) {{ {_USER_FIELDS} }} }}",
            {"username": username},
        )
        for item in data.get("users") or []:
            user = _user(item)
            if user.username == username:
                return user
        raise UserNotFoundError()

    def update(self, username: str, changeset: UserChangeSet) -> User:
        """Apply the set attributes of ``changeset`` to a user."""
        data = self.client.mutate(
            f"mutation({_USER_INPUT_PARAMS}) {{ updateUser(input: {_USER_INPUT}) "
            f"{{ user {{ {_USER_FIELDS} }} }} }}",
            _changeset_variables(username, changeset),
        )
        return _user((data.get("updateUser") or {}).get("user"))

    def add(self, username: str, changeset: UserChangeSet) -> User:
        """Create a user and return it as stored by the server."""
        self.client.mutate(
            f"mutation({_USER_INPUT_PARAMS}) {{ addUserV2(input: {_USER_INPUT}) "
            "{ __typename } }",
            _changeset_variables(username, changeset),
        )
        return self.get(username)

    def remove(self, username: str) -> User:
        """Delete a user and return what it was."""
        data = self.client.mutate(
            "mutation($username: String!) { removeUser(input: {username: $username}) "
            f"{{ user {{ {_USER_FIELDS} }} }} }}",
            {"username": username},
        )
        return _user((data.get("removeUser") or {}).get("user"))

    def rotate_user_api_token_and_get(self, user_id: str) -> str:
        """Issue a new API token for a user and return it."""
        data = self.client.mutate(
            "mutation($id: String!) { rotateUserApiTokenAndGet(input:{id:$id}) "
            "{ rotateUserApiToken { token } } }",
            {"id": user_id},
        )
        outer = data.get("rotateUserApiTokenAndGet") or {}
        return (outer.get("rotateUserApiToken") or {}).get("token") or ""


@dataclass
class Group:
    """A user group."""

    id: str = ""
    display_name: str = ""


class Groups:
    """Manages groups and their members."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def list(self) -> list[Group]:
        """All groups."""
        data = self.client.query(
            "{ groupsPage(pageNumber:1,pageSize:2147483647) { page { id displayName } } }"
        )
        page = (data.get("groupsPage") or {}).get("page") or []
        return [
            Group(id=item.get("id") or "", display_name=item.get("displayName") or "")
            for item in page
        ]

    def add_user_to_group(self, group_id: str, user_id: str) -> None:
        """Add a user to a group; fails if the user is not a member afterwards."""
        data = self.client.mutate(
            "mutation($userID: String!, $groupID: String!) { "
            "addUsersToGroup(input:{users:[$userID], groupId: $groupID}) "
            "{ group { users { id } } } }",
            {"userID": user_id, "groupID": group_id},
        )
        group = (data.get("addUsersToGroup") or {}).get("group") or {}
        if not any(user.get("id") == user_id for user in group.get("users") or []):
            raise UserNotFoundError()

    def remove_user_from_group(self, group_id: str, user_id: str) -> None:
        """Remove a user from a group."""
        self.client.mutate(
            "mutation($userID: String!, $groupID: String!) { "
            "removeUsersFromGroup(input:{users:[$userID], groupId: $groupID}) "
            "{ group { id } } }",
            {"userID": user_id, "groupID": group_id},
        )


@dataclass
class Organization:
    """An organization."""

    id: str = ""
    name: str = ""
    description: str | None = field(default=None)


class Organizations:
    """Manages organizations."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def create_organization(self, name: str) -> Organization:
        """Create an empty organization."""
        data = self.client.mutate(
            "mutation($name: String!) { createEmptyOrganization(name: $name) "
            "{ id name description } }",
            {"name": name},
        )
        item = data.get("createEmptyOrganization") or {}
        return Organization(
            id=item.get("id") or "",
            name=item.get("name") or "",
            description=item.get("description"),
        )


class Viewer:
    """Information about the user owning the API token in use."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def username(self) -> str:
        """Username tied to the API token in use."""
        data = self.client.query("{ viewer { username } }")
        return (data.get("viewer") or {}).get("username") or ""

    def api_token(self) -> str:
        """API token of the authenticated user."""
        data = self.client.query("{ viewer { apiToken } }")
        return (data.get("viewer") or {}).get("apiToken") or ""