import json

import pytest
import responses

from humioapi.client import (
    DEFAULT_USER_AGENT,
    JSON_CONTENT_TYPE,
    Client,
    Config,
    default_config,
    new_http_session,
)
from humioapi.errors import GraphQLError, HTTPStatusError

BASE = "https://humio.example.com/"


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def make_client(**kwargs):
    return Client(Config(address=BASE, **kwargs))


def test_default_config_is_empty():
    config = default_config()
    assert config.address is None
    assert config.token == ""
    assert config.insecure is False


def test_address_gets_trailing_slash():
    client = Client(Config(address="https://humio.example.com/base"))
    assert client.config.address == "https://humio.example.com/base/"
    assert client.url_for("graphql") == "https://humio.example.com/base/graphql"


def test_url_for_without_address_raises():
    with pytest.raises(ValueError):
        Client(Config()).url_for("graphql")


def test_default_user_agent_applied():
    client = make_client()
    assert client.headers()["User-Agent"] == DEFAULT_USER_AGENT


def test_headers_with_token_and_proxy_org():
    client = make_client(token="token", proxy_organization="org1", user_agent="agent")
    assert client.headers() == {
        "Authorization": "Bearer token",
        "ProxyOrganization": "org1",
        "User-Agent": "agent",
    }


def test_headers_without_token():
    assert "Authorization" not in make_client().headers()


def test_insecure_session_disables_verification():
    assert new_http_session(Config(insecure=True)).verify is False
    assert new_http_session(Config()).verify is True


def test_query_sends_document_and_returns_data(mocked):
    mocked.add(responses.POST, BASE + "graphql", json={"data": {"viewer": {"username": "bob"}}})
    client = make_client(token="token")
    data = client.query("query { viewer { username } }", {"a": 1})
    assert data == {"viewer": {"username": "bob"}}
    request = mocked.calls[0].request
    assert json.loads(request.body) == {"query": "query { viewer { username } }", "variables": {"a": 1}}
    assert request.headers["Authorization"] == "Bearer token"


def test_mutate_omits_empty_variables(mocked):
    mocked.add(responses.POST, BASE + "graphql", json={"data": {"x": True}})
    assert make_client().mutate("mutation { x }") == {"x": True}
    assert "variables" not in json.loads(mocked.calls[0].request.body)


def test_graphql_errors_raise(mocked):
    mocked.add(responses.POST, BASE + "graphql", json={"errors": [{"message": "boom"}], "data": None})
    with pytest.raises(GraphQLError) as info:
        make_client().query("query { x }")
    assert str(info.value) == "boom"


def test_graphql_non_200_raises(mocked):
    mocked.add(responses.POST, BASE + "graphql", status=502, body="bad gateway")
    with pytest.raises(HTTPStatusError) as info:
        make_client().query("query { x }")
    assert info.value.status_code == 502
    assert info.value.body == "bad gateway"


def test_http_request_sets_content_type(mocked):
    mocked.add(responses.GET, BASE + "api/v1/status", body="ok", status=418)
    response = make_client().http_request("GET", "api/v1/status")
    assert response.status_code == 418
    assert mocked.calls[0].request.headers["Content-Type"] == JSON_CONTENT_TYPE


def test_http_request_custom_content_type_and_body(mocked):
    mocked.add(responses.POST, BASE + "upload", body="stored", status=201)
    response = make_client().http_request("POST", "upload", b"PK", "application/zip")
    assert response.status_code == 201
    assert response.text == "stored"
    request = mocked.calls[0].request
    assert request.headers["Content-Type"] == "application/zip"
    assert request.body == b"PK"