import pytest

from humioapi.errors import HumioError
from humioapi.views import View, ViewConnection, ViewListItem, Views


class FakeClient:
    def __init__(self, data=None, error=None):
        self.data = data or {}
        self.error = error
        self.calls = []

    def query(self, document, variables=None):
        self.calls.append(("query", document, variables))
        if self.error:
            raise self.error
        return self.data

    def mutate(self, document, variables=None):
        self.calls.append(("mutate", document, variables))
        if self.error:
            raise self.error
        return self.data


def test_get_maps_connections():
    client = FakeClient(
        {
            "searchDomain": {
                "name": "web",
                "description": "all web logs",
                "connections": [
                    {"repository": {"name": "nginx"}, "filter": "status=500"},
                    {"repository": {"name": "apache"}, "filter": "*"},
                ],
            }
        }
    )
    view = Views(client).get("web")
    assert view == View(
        name="web",
        description="all web logs",
        connections=[ViewConnection("nginx", "status=500"), ViewConnection("apache", "*")],
    )
    assert client.calls[0][2] == {"name": "web"}


def test_get_repository_has_no_connections():
    client = FakeClient({"searchDomain": {"name": "repo", "description": ""}})
    view = Views(client).get("repo")
    assert view.connections == []
    assert view.name == "repo"


def test_list_sorted_ignoring_case():
    client = FakeClient({"searchDomains": [{"name": "b"}, {"name": "A"}, {"name": "c"}]})
    items = Views(client).list()
    assert items == [ViewListItem("A"), ViewListItem("b"), ViewListItem("c")]


def test_create_sends_connections():
    client = FakeClient()
    Views(client).create("v", "desc", {"r1": "f1", "r2": "f2"})
    kind, document, variables = client.calls[0]
    assert kind == "mutate"
    assert "createView" in document
    assert variables["name"] == "v"
    assert variables["description"] == "desc"
    assert sorted(variables["connections"], key=lambda c: c["repositoryName"]) == [
        {"repositoryName": "r1", "filter": "f1"},
        {"repositoryName": "r2", "filter": "f2"},
    ]


def test_delete_variables():
    client = FakeClient()
    Views(client).delete("v", "not needed")
    kind, document, variables = client.calls[0]
    assert "deleteSearchDomain" in document
    assert variables == {"name": "v", "reason": "not needed"}


def test_update_connections_variables():
    client = FakeClient()
    Views(client).update_connections("v", {"r": "x"})
    _, document, variables = client.calls[0]
    assert "updateView" in document
    assert variables == {"viewName": "v", "connections": [{"repositoryName": "r", "filter": "x"}]}


def test_update_description_variables():
    client = FakeClient()
    Views(client).update_description("v", "new text")
    _, document, variables = client.calls[0]
    assert "updateDescriptionForSearchDomain" in document
    assert variables == {"name": "v", "description": "new text"}


def test_query_error_propagates():
    client = FakeClient(error=HumioError("boom"))
    with pytest.raises(HumioError, match="boom"):
        Views(client).list()