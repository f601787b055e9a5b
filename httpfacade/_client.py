from __future__ import annotations

import typing

from ._body import Body
from ._headers import HeaderTypes
from ._models import Response
from ._request import DELETE, GET, PATCH, POST, PUT, Request
from ._transports import HttpxTransport, Transport


class Client:
    """Holds the base URL and transport, and mints one :class:`Request` per call.

    Usage::

        client = Client("https://api.example.com")
        user = client.get("/users/{id}", params={"id": 7}).data
    """

    def __init__(self, base_url: typing.Any = "", *, transport: Transport | None = None) -> None:
        self.base_url = base_url
        self.transport: Transport = transport if transport is not None else HttpxTransport()

    def new_request(self) -> Request:
        return Request(self.base_url, transport=self.transport)

    def request(
        self,
        method: str,
        url: str,
        header: HeaderTypes | None = None,
        body: Body | None = None,
        *,
        params: typing.Mapping[str, typing.Any] | None = None,
    ) -> Response:
        request = self.new_request()
        if params:
            request.set(params)
        return request.request(method, url, header, body)

    def get(
        self,
        url: str,
        header: HeaderTypes | None = None,
        *,
        params: typing.Mapping[str, typing.Any] | None = None,
    ) -> Response:
        return self.request(GET, url, header, params=params)

    def post(
        self,
        url: str,
        header: HeaderTypes | None = None,
        body: Body | None = None,
        *,
        params: typing.Mapping[str, typing.Any] | None = None,
    ) -> Response:
        return self.request(POST, url, header, body, params=params)

    def put(
        self,
        url: str,
        header: HeaderTypes | None = None,
        body: Body | None = None,
        *,
        params: typing.Mapping[str, typing.Any] | None = None,
    ) -> Response:
        return self.request(PUT, url, header, body, params=params)

    def patch(
        self,
        url: str,
        header: HeaderTypes | None = None,
        body: Body | None = None,
        *,
        params: typing.Mapping[str, typing.Any] | None = None,
    ) -> Response:
        return self.request(PATCH, url, header, body, params=params)

    def delete(
        self,
        url: str,
        header: HeaderTypes | None = None,
        body: Body | None = None,
        *,
        params: typing.Mapping[str, typing.Any] | None = None,
    ) -> Response:
        return self.request(DELETE, url, header, body, params=params)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} base_url={str(self.base_url)!r}>"
