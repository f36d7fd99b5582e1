"""Feature flag management."""

from __future__ import annotations

from .client import Client

_SUPPORTED_FLAGS = '{ __type(name: "FeatureFlag") { enumValues { name } } }'


class FeatureFlags:
    """Lists and toggles server feature flags."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def supported_flags(self) -> list[str]:
        """Names of every feature flag the server knows."""
        data = self.client.query(_SUPPORTED_FLAGS)
        type_info = data.get("__type") or {}
        return [value["name"] for value in type_info.get("enumValues") or []]

    def _toggle(
        self,
        operation: str,
        flag: str,
        target_arg: str | None = None,
        target: str | None = None,
    ) -> None:
        params = ["$feature: FeatureFlag!"]
        args = ["feature: $feature"]
        variables = {"feature": flag}
        if target_arg is not None:
            params.append(f"${target_arg}: String!")
            args.append(f"{target_arg}: ${target_arg}")
            variables[target_arg] = target
        document = f"mutation({', '.join(params)}) {{ {operation}({', '.join(args)}) }}"
        self.client.mutate(document, variables)

    def enable_globally(self, flag: str) -> None:
        """Enable a flag for everyone."""
        self._toggle("enableFeature", flag)

    def disable_globally(self, flag: str) -> None:
        """Disable a flag for everyone."""
        self._toggle("disableFeature", flag)

    def enable_for_organization(self, organization_id: str, flag: str) -> None:
        """Enable a flag for one organization."""
        self._toggle("enableFeatureForOrg", flag, "orgId", organization_id)

    def disable_for_organization(self, organization_id: str, flag: str) -> None:
        """Disable a flag for one organization."""
        self._toggle("disableFeatureForOrg", flag, "orgId", organization_id)

    def enable_for_user(self, user_id: str, flag: str) -> None:
        """Enable a flag for one user."""
        self._toggle("enableFeatureForUser", flag, "userId", user_id)

    def disable_for_user(self, user_id: str, flag: str) -> None:
        """Disable a flag for one user."""
        self._toggle("disableFeatureForUser", flag, "userId", user_id)