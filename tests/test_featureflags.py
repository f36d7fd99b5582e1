import json

import pytest
import responses

from humioapi.client import Client, Config
from humioapi.errors import GraphQLError
from humioapi.featureflags import FeatureFlags

GRAPHQL = "https://humio.example.com/graphql"


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def flags():
    return FeatureFlags(Client(Config(address="https://humio.example.com")))


def sent(mocked):
    return json.loads(mocked.calls[0].request.body)


def test_supported_flags(mocked, flags):
    mocked.add(
        responses.POST,
        GRAPHQL,
        json={"data": {"__type": {"enumValues": [{"name": "A"}, {"name": "B"}]}}},
    )
    assert flags.supported_flags() == ["A", "B"]
    assert '__type(name: "FeatureFlag")' in sent(mocked)["query"]


def test_supported_flags_missing_type(mocked, flags):
    mocked.add(responses.POST, GRAPHQL, json={"data": {"__type": None}})
    assert flags.supported_flags() == []


def test_enable_globally(mocked, flags):
    mocked.add(responses.POST, GRAPHQL, json={"data": {"enableFeature": True}})
    assert flags.enable_globally("X") is None
    payload = sent(mocked)
    assert "enableFeature(feature: $feature)" in payload["query"]
    assert payload["variables"] == {"feature": "X"}


def test_disable_globally(mocked, flags):
    mocked.add(responses.POST, GRAPHQL, json={"data": {"disableFeature": True}})
    assert flags.disable_globally("X") is None
    assert "disableFeature(feature: $feature)" in sent(mocked)["query"]


@pytest.mark.parametrize(
    "method, operation, arg",
    [
        ("enable_for_organization", "enableFeatureForOrg", "orgId"),
        ("disable_for_organization", "disableFeatureForOrg", "orgId"),
        ("enable_for_user", "enableFeatureForUser", "userId"),
        ("disable_for_user", "disableFeatureForUser", "userId"),
    ],
)
def test_targeted_toggles(mocked, flags, method, operation, arg):
    mocked.add(responses.POST, GRAPHQL, json={"data": {operation: True}})
    assert getattr(flags, method)("target-1", "X") is None
    payload = sent(mocked)
    assert f"{operation}(feature: $feature, {arg}: ${arg})" in payload["query"]
    assert payload["variables"] == {"feature": "X", arg: "target-1"}


def test_toggle_error_raises(mocked, flags):
    mocked.add(responses.POST, GRAPHQL, json={"errors": [{"message": "unknown flag"}]})
    with pytest.raises(GraphQLError) as info:
        flags.enable_globally("Nope")
    assert str(info.value) == "unknown flag"