"""Uploaded lookup files."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import BinaryIO, TextIO, Union
from urllib.parse import quote

from .client import Client
from .errors import HTTPStatusError

_PATH_SAFE = "$&+:=@"

Readable = Union[bytes, str, BinaryIO, TextIO]


@dataclass
class File:
    """A file uploaded to a view."""

    id: str = ""
    name: str = ""
    content_hash: str = ""


def _path_escape(segment: str) -> str:
    return quote(segment, safe=_PATH_SAFE)


def _read_all(reader: Readable) -> bytes:
    data = reader if isinstance(reader, (bytes, str)) else reader.read()
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _escape_quotes(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _multipart(file_name: str, content: bytes) -> tuple[bytes, str]:
    boundary = uuid.uuid4().hex
    head = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="file"; '
        f'filename="{_escape_quotes(file_name)}"\r\n'
        "Content-Type: application/octet-stream\r\n\r\n"
    ).encode("utf-8")
    tail = f"\r\n--{boundary}--\r\n".encode("ascii")
    return head + content + tail, f"multipart/form-data; boundary={boundary}"


def _check_ok(response) -> None:
    if response.status_code != 200:
        body = response.text
        raise HTTPStatusError(
            f"server responded with {response.status_code} {response.reason}: {body}",
            response.status_code,
            body,
        )


class Files:
    """Lists, uploads, downloads and deletes files in a view."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def list(self, view_name: str) -> list[File]:
        """All files in a view."""
        data = self.client.query(
            "query($viewName: String!) { searchDomain(name:$viewName) "
            "{ files { id name contentHash } } }",
            {"viewName": view_name},
        )
        domain = data.get("searchDomain") or {}
        return [
            File(
                id=item.get("id") or "",
                name=item.get("name") or "",
                content_hash=item.get("contentHash") or "",
            )
            for item in domain.get("files") or []
        ]

    def delete(self, view_name: str, file_name: str) -> None:
        """Delete a file from a view."""
        self.client.mutate(
            "mutation($viewName: String!, $fileName: String!) "
            "{ removeFile(name:$viewName, fileName: $fileName) { __typename } }",
            {"viewName": view_name, "fileName": file_name},
        )

    def upload(self, view_name: str, file_name: str, reader: Readable) -> None:
        """Upload content (bytes, text or a readable file) under ``file_name``."""
        body, content_type = _multipart(file_name, _read_all(reader))
        response = self.client.http_request(
            "POST",
            f"api/v1/dataspaces/{_path_escape(view_name)}/files",
            body,
            content_type,
        )
        _check_ok(response)

    def download(self, view_name: str, file_name: str) -> bytes:
        """The content of a file."""
        response = self.client.http_request(
            "GET",
            f"api/v1/dataspaces/{_path_escape(view_name)}/files/{_path_escape(file_name)}",
        )
        _check_ok(response)
        return response.content