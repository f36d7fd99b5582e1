"""License installation and inspection."""

from __future__ import annotations

from dataclasses import dataclass

from .client import Client

_INSTALLED_LICENSE = (
    "{ installedLicense { expiresAt issuedAt "
    "... on OnPremLicense { uid owner maxUsers } } }"
)


@dataclass
class OnPremLicense:
    """An installed on-premises license."""

    id: str = ""
    expires_at: str = ""
    issued_at: str = ""
    issued_to: str = ""
    number_of_seats: int = 0


class Licenses:
    """Installs and reads the server license."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def install(self, license: str) -> None:
        """Install a license key."""
        self.client.mutate(
            "mutation($license: String!) { updateLicenseKey(license: $license) "
            "{ __typename } }",
            {"license": license},
        )

    def get(self) -> OnPremLicense:
        """The currently installed license."""
        data = self.client.query(_INSTALLED_LICENSE)
        installed = data.get("installedLicense") or {}
        return OnPremLicense(
            id=installed.get("uid") or "",
            expires_at=installed.get("expiresAt") or "",
            issued_at=installed.get("issuedAt") or "",
            issued_to=installed.get("owner") or "",
            number_of_seats=installed.get("maxUsers") or 0,
        )