import pytest

import httpfacade
from tests.conftest import RecordingTransport, echoed


def test_new_request_is_fresh_each_time():
    client = httpfacade.Client("http://api.test", transport=RecordingTransport())
    first = client.new_request()
    second = client.new_request()
    assert first is not second
    assert not first.is_consumed


def test_client_params_fill_template(echo_transport):
    client = httpfacade.Client("http://api.test", transport=echo_transport)
    data = echoed(client.get("/users/{id}", params={"id": 7, "expand": "roles"}))
    assert data["path"] == "/users/7"
    assert data["query"] == "expand=roles"


def test_params_do_not_leak_between_calls():
    transport = RecordingTransport()
    client = httpfacade.Client("http://api.test", transport=transport)
    client.get("/a", params={"x": 1})
    client.get("/b")
    assert [o.url for o in transport.calls] == ["http://api.test/a?x=1", "http://api.test/b"]


@pytest.mark.parametrize("verb", ["post", "put", "patch", "delete"])
def test_verbs_send_body(echo_transport, verb):
    client = httpfacade.Client("http://api.test", transport=echo_transport)
    data = echoed(getattr(client, verb)("/items", body=httpfacade.Body({"n": 1})))
    assert data["method"] == verb.upper()
    assert data["body"] == '{"n":1}'


def test_client_with_base_uri_object():
    base = httpfacade.BaseUri()
    transport = RecordingTransport()
    client = httpfacade.Client(base, transport=transport)
    base.set_base_uri("https://late.example.com/")
    client.get("/ping")
    assert transport.last.url == "https://late.example.com/ping"


def test_default_transport_is_httpx():
    client = httpfacade.Client()
    assert isinstance(client.transport, httpfacade.HttpxTransport)
    assert repr(client) == "<Client base_url=''>"
