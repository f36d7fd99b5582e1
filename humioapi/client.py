"""HTTP and GraphQL client for a Humio server."""

from __future__ import annotations

import ssl
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests
from requests.adapters import HTTPAdapter

from .errors import GraphQLError, HTTPStatusError

DEFAULT_USER_AGENT = "humioapi/unknown"
JSON_CONTENT_TYPE = "application/json"
ZIP_CONTENT_TYPE = "application/zip"
REQUEST_TIMEOUT = 30.0
_POOL_SIZE = 100


@dataclass
class Config:
    """Connection settings for a :class:`Client`."""

    address: str | None = None
    user_agent: str = ""
    token: str = ""
    ca_certificate_pem: str = ""
    insecure: bool = False
    proxy_organization: str = ""


def default_config() -> Config:
    """Return an empty configuration."""
    return Config()


class _SSLContextAdapter(HTTPAdapter):
    """Adapter that verifies servers against a specific SSL context."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs: Any) -> None:
        self._ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["ssl_context"] = self._ssl_context
        super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args: Any, **kwargs: Any):
        kwargs["ssl_context"] = self._ssl_context
        return super().proxy_manager_for(*args, **kwargs)


def _ca_context(pem: str) -> ssl.SSLContext:
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        context.load_verify_locations(cadata=pem)
    except ssl.SSLError:
        # An unusable bundle leaves the context with no trusted roots.
        pass
    return context


def new_http_session(config: Config) -> requests.Session:
    """Build a session honouring the TLS settings of ``config``."""
    session = requests.Session()
    session.mount("http://", HTTPAdapter(pool_maxsize=_POOL_SIZE))
    if config.insecure:
        session.verify = False
        session.mount("https://", HTTPAdapter(pool_maxsize=_POOL_SIZE))
    elif config.ca_certificate_pem:
        adapter = _SSLContextAdapter(
            _ca_context(config.ca_certificate_pem), pool_maxsize=_POOL_SIZE
        )
        session.mount("https://", adapter)
    else:
        session.mount("https://", HTTPAdapter(pool_maxsize=_POOL_SIZE))
    return session


def _with_trailing_slash(address: str | None) -> str | None:
    if address is None:
        return None
    parts = urlsplit(address)
    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    return urlunsplit(parts._replace(path=path))


class Client:
    """Talks to one Humio server over HTTP and GraphQL."""

    def __init__(
        self, config: Config | None = None, session: requests.Session | None = None
    ) -> None:
        config = config if config is not None else default_config()
        self.config = replace(
            config,
            address=_with_trailing_slash(config.address),
            user_agent=config.user_agent or DEFAULT_USER_AGENT,
        )
        self.session = session if session is not None else new_http_session(self.config)

    def headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers: dict[str, str] = {}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        if self.config.proxy_organization:
            headers["ProxyOrganization"] = self.config.proxy_organization
        if self.config.user_agent:
            headers["User-Agent"] = self.config.user_agent
        return headers

    def url_for(self, path: str) -> str:
        """Resolve ``path`` against the server address."""
        if self.config.address is None:
            raise ValueError("no server address configured")
        return urljoin(self.config.address, path)

    def _graphql(self, document: str, variables: dict[str, Any] | None) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = variables
        response = self.session.post(
            self.url_for("graphql"),
            json=payload,
            headers=self.headers(),
            timeout=REQUEST_TIMEOUT,
        )
        if response.status_code != 200:
            body = response.text
            raise HTTPStatusError(
                f"non-200 OK status code: {response.status_code} {response.reason} "
                f"body: {body!r}",
                response.status_code,
                body,
            )
        result = response.json()
        errors = result.get("errors")
        if errors:
            raise GraphQLError(errors)
        return result.get("data") or {}

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL query document and return its ``data`` object."""
        return self._graphql(query, variables)

    def mutate(
        self, mutation: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a GraphQL mutation document and return its ``data`` object."""
        return self._graphql(mutation, variables)

    def http_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> requests.Response:
        """Send a plain HTTP request; the status code is left to the caller."""
        headers = self.headers()
        headers["Content-Type"] = content_type
        return self.session.request(
            method,
            self.url_for(path),
            data=body if body is not None else b"",
            headers=headers,
            timeout=REQUEST_TIMEOUT,
        )