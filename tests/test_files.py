import io
import json
from email import policy
from email.parser import BytesParser

import pytest
import responses

from humioapi.client import Client, Config
from humioapi.errors import HTTPStatusError
from humioapi.files import Files

BASE = "https://humio.example.com/"
GRAPHQL = BASE + "graphql"
UPLOAD_URL = BASE + "api/v1/dataspaces/my%20view/files"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def files():
    return Files(Client(Config(address="https://humio.example.com", token="token")))


def _parse_multipart(request):
    content_type = request.headers["Content-Type"]
    raw = b"Content-Type: " + content_type.encode() + b"\r\n\r\n" + request.body
    message = BytesParser(policy=policy.default).parsebytes(raw)
    return next(message.iter_parts())


def test_list(rsps, files):
    rsps.add(
        responses.POST,
        GRAPHQL,
        json={"data": {"searchDomain": {"files": [{"id": "f1", "name": "a.csv", "contentHash": "h"}]}}},
    )
    result = files.list("view")
    assert [(f.id, f.name, f.content_hash) for f in result] == [("f1", "a.csv", "h")]
    assert json.loads(rsps.calls[0].request.body)["variables"] == {"viewName": "view"}


def test_delete(rsps, files):
    rsps.add(responses.POST, GRAPHQL, json={"data": {"removeFile": {"__typename": "X"}}})
    assert files.delete("view", "a.csv") is None
    sent = json.loads(rsps.calls[0].request.body)
    assert sent["variables"] == {"viewName": "view", "fileName": "a.csv"}
    assert "removeFile" in sent["query"]


@pytest.mark.parametrize("source", [b"a,b\n1,2\n", io.BytesIO(b"a,b\n1,2\n")])
def test_upload_round_trips_content(rsps, files, source):
    rsps.add(responses.POST, UPLOAD_URL, status=200)
    assert files.upload("my view", "lookup.csv", source) is None
    request = rsps.calls[0].request
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    part = _parse_multipart(request)
    assert part.get_param("name", header="content-disposition") == "file"
    assert part.get_filename() == "lookup.csv"
    assert part.get_payload(decode=True) == b"a,b\n1,2\n"


def test_upload_escapes_quotes_in_file_name(rsps, files):
    rsps.add(responses.POST, UPLOAD_URL, status=200)
    assert files.upload("my view", 'a"b', b"x") is None
    assert b'filename="a\\"b"' in rsps.calls[0].request.body


def test_upload_error_status_raises(rsps, files):
    rsps.add(responses.POST, UPLOAD_URL, status=500, body="broken")
    with pytest.raises(HTTPStatusError) as info:
        files.upload("my view", "lookup.csv", b"x")
    assert info.value.status_code == 500
    assert "broken" in str(info.value)


def test_download_returns_content(rsps, files):
    rsps.add(responses.GET, BASE + "api/v1/dataspaces/view/files/lookup.csv", body=b"1,2")
    assert files.download("view", "lookup.csv") == b"1,2"


def test_download_error_status_raises(rsps, files):
    rsps.add(
        responses.GET,
        BASE + "api/v1/dataspaces/view/files/missing.csv",
        status=404,
        body="no such file",
    )
    with pytest.raises(HTTPStatusError) as info:
        files.download("view", "missing.csv")
    assert info.value.status_code == 404
    assert info.value.body == "no such file"