from __future__ import annotations

import contextlib
import typing

import httpx
import pytest

import httpfacade


def echo(request: httpx.Request) -> httpx.Response:
    """Reply with a JSON description of the request that was received."""
    return httpx.Response(
        200,
        json={
            "method": request.method,
            "url": str(request.url),
            "path": request.url.path,
            "query": request.url.query.decode("ascii"),
            "headers": dict(request.headers),
            "body": request.content.decode("utf-8"),
        },
    )


class RecordingTransport:
    """Transport that records the options it was given and replays a result."""

    def __init__(self, result: httpfacade.TransportResult | None = None) -> None:
        self.result = result or httpfacade.TransportResult(
            content="{}",
            info=httpfacade.TransferInfo(url="http://example.org/", status_code=200),
        )
        self.calls: list[httpfacade.TransportOptions] = []
        self.opened = 0
        self.closed = 0

    @contextlib.contextmanager
    def open(self) -> typing.Iterator[RecordingTransport]:
        self.opened += 1
        try:
            yield self
        finally:
            self.closed += 1

    def execute(self, options: httpfacade.TransportOptions) -> httpfacade.TransportResult:
        self.calls.append(options)
        return self.result

    @property
    def last(self) -> httpfacade.TransportOptions:
        return self.calls[-1]


@pytest.fixture
def echo_transport() -> httpfacade.HttpxTransport:
    return httpfacade.HttpxTransport(httpx.MockTransport(echo))


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()


def replying(content: str, content_type: str = "application/json") -> httpfacade.HttpxTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=content, headers={"Content-Type": content_type})

    return httpfacade.HttpxTransport(httpx.MockTransport(handler))


def echoed(response: httpfacade.Response) -> dict[str, typing.Any]:
    assert isinstance(response.data, dict)
    return response.data
