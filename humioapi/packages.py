"""Package validation, installation and archiving."""

from __future__ import annotations

import json
import os
import tempfile
import zipfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Iterator, Union
from urllib.parse import quote_plus

from .client import Client
from .errors import HTTPStatusError, HumioError

ZIP_CONTENT_TYPE = "application/zip"

_PACKAGE_FIELDS = (
    "id installedBy { username timestamp } updatedBy { username timestamp } "
    "source availableUpdate"
)

ZipTarget = Union[str, os.PathLike, IO[bytes]]


@dataclass
class ValidationResponse:
    """Errors found when validating or installing a package."""

    installation_errors: list[str] = field(default_factory=list)
    parse_errors: list[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        """True if the package has no errors."""
        return not self.installation_errors and not self.parse_errors


@dataclass
class InstalledPackage:
    """A package installed in a view; who installed and updated it, if known."""

    id: str = ""
    installed_by: dict[str, str] | None = None
    updated_by: dict[str, str] | None = None
    source: str = ""
    available_update: str = ""


class PackageInstallError(HumioError):
    """The server refused to install a package."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


def is_valid_folder_or_file(name: str) -> bool:
    """Whether a directory entry belongs in a package archive."""
    return not name.startswith("_") and not name.startswith(".")


def _add_files(archive: zipfile.ZipFile, base_path: Path, base_in_zip: str) -> None:
    for entry in sorted(base_path.iterdir(), key=lambda p: p.name):
        if not is_valid_folder_or_file(entry.name):
            continue
        name_in_zip = f"{base_in_zip}/{entry.name}" if base_in_zip else entry.name
        if entry.is_dir():
            _add_files(archive, entry, name_in_zip)
        else:
            archive.writestr(name_in_zip, entry.read_bytes())


def create_zip_from_folder(base_folder: str | os.PathLike, out_file: ZipTarget) -> None:
    """Write the package files under ``base_folder`` into a zip archive."""
    with zipfile.ZipFile(out_file, "w", zipfile.ZIP_DEFLATED) as archive:
        _add_files(archive, Path(base_folder), "")


@contextmanager
def _temp_zip(base_folder: str | os.PathLike) -> Iterator[str]:
    handle = tempfile.NamedTemporaryFile(
        prefix="humio-package.", suffix=".zip", delete=False
    )
    try:
        with handle:
            create_zip_from_folder(base_folder, handle)
        yield handle.name
    finally:
        os.remove(handle.name)


def _validation_response(content: bytes) -> ValidationResponse:
    data = json.loads(content) or {}
    return ValidationResponse(
        installation_errors=list(data.get("installationErrors") or []),
        parse_errors=list(data.get("parseErrors") or []),
    )


def _installation_error(content: bytes) -> PackageInstallError:
    try:
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError("not an object")
    except ValueError:
        return PackageInstallError(
            "the package could not be installed and the reason returned could not be parsed"
        )
    errors = list(data.get("parseErrors") or []) + list(
        data.get("installationErrors") or []
    )
    return PackageInstallError("".join(f"\n    - {e}" for e in errors), errors)


def _user_stamp(data: dict[str, Any] | None) -> dict[str, str] | None:
    if data is None:
        return None
    return {
        "username": data.get("username") or "",
        "timestamp": data.get("timestamp") or "",
    }


class Packages:
    """Validates, installs, lists and uninstalls packages."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _post_zip(self, path: str, zip_path: str | os.PathLike):
        body = Path(zip_path).read_bytes()
        return self.client.http_request("POST", path, body, ZIP_CONTENT_TYPE)

    def validate(self, view_name: str, abs_path: str | os.PathLike) -> ValidationResponse:
        """Check a package directory or zip file against the server."""
        is_dir = Path(abs_path).stat() and Path(abs_path).is_dir()
        url_path = "api/v1/packages/analyze?view=" + quote_plus(view_name)
        if is_dir:
            with _temp_zip(abs_path) as zip_path:
                response = self._post_zip(url_path, zip_path)
        else:
            response = self._post_zip(url_path, abs_path)
        if response.status_code >= 400:
            raise HTTPStatusError(
                f"bad response. {response.status_code} {response.reason}",
                response.status_code,
                response.text,
            )
        return _validation_response(response.content)

    def list_installed(self, view_name: str) -> list[InstalledPackage]:
        """Packages installed in a view."""
        data = self.client.query(
            "query($repositoryName: String!) { searchDomain(name: $repositoryName) "
            f"{{ installedPackages {{ {_PACKAGE_FIELDS} }} }} }}",
            {"repositoryName": view_name},
        )
        domain = data.get("searchDomain") or {}
        return [
            InstalledPackage(
                id=item.get("id") or "",
                installed_by=_user_stamp(item.get("installedBy")),
                updated_by=_user_stamp(item.get("updatedBy")),
                source=item.get("source") or "",
                available_update=item.get("availableUpdate") or "",
            )
            for item in domain.get("installedPackages") or []
        ]

    def install_archive(
        self, view_name: str, path_to_zip: str | os.PathLike
    ) -> ValidationResponse:
        """Install a package from a local zip file, overwriting an existing one."""
        url_path = (
            "api/v1/packages/install?view=" + quote_plus(view_name) + "&overwrite=true"
        )
        response = self._post_zip(url_path, path_to_zip)
        if response.status_code >= 400:
            raise _installation_error(response.content)
        return _validation_response(response.content)

    def uninstall_package(self, view_name: str, package_id: str) -> None:
        """Uninstall a package from a view."""
        self.client.mutate(
            "mutation($packageId: UnversionedPackageSpecifier!, $viewName: String!) "
            "{ uninstallPackage(packageId: $packageId, viewName: $viewName) "
            "{ __typename } }",
            {"packageId": package_id, "viewName": view_name},
        )

    def create_archive(
        self, package_dir_path: str | os.PathLike, target_file_name: str | os.PathLike
    ) -> None:
        """Bundle a package directory into a zip file."""
        with open(target_file_name, "wb") as out_file:
            create_zip_from_folder(package_dir_path, out_file)

    def install_from_directory(
        self, package_dir_path: str | os.PathLike, target_repo_or_view: str
    ) -> ValidationResponse:
        """Install a package from a directory holding its files."""
        with _temp_zip(package_dir_path) as zip_path:
            return self.install_archive(target_repo_or_view, zip_path)