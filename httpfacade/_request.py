from __future__ import annotations

import logging
import typing

from ._body import Body
from ._content import ContentType
from ._exceptions import RequestReusedError, TransportError
from ._headers import Header, HeaderTypes
from ._models import Response
from ._transports import (
    CONNECT_TIMEOUT,
    TIMEOUT,
    HttpxTransport,
    Transport,
    TransportOptions,
    TransportResult,
)
from ._urlencode import build_query, stringify

logger = logging.getLogger(__name__)

GET = "GET"
POST = "POST"
PUT = "PUT"
PATCH = "PATCH"
DELETE = "DELETE"


class Request:
    """One outbound call: stage parameters, then invoke a verb.

    Path parameters fill ``{name}`` placeholders in the URL; parameters
    that match no placeholder are sent as the query string::

        request = Request("https://api.example.com", transport=transport)
        request.set("id", 7)
        request.set("expand", "roles")
        response = request.get("/users/{id}")  # GET /users/7?expand=roles

    A Request is single-use. Once a verb has run, staging or dispatching
    again raises :class:`RequestReusedError`; use a fresh instance (or
    :meth:`Client.new_request`) per call.
    """

    def __init__(
        self,
        base_url: typing.Any = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        self._base_url = "" if base_url is None else base_url
        self._transport: Transport = transport if transport is not None else HttpxTransport()
        self._parameters: dict[str, typing.Any] = {}
        self._options: dict[str, typing.Any] = {}
        self._response: Response | None = None
        self._consumed = False

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} base_url={str(self._base_url)!r} "
            f"parameters={self._parameters!r}>"
        )

    @property
    def parameters(self) -> dict[str, typing.Any]:
        return dict(self._parameters)

    @property
    def options(self) -> dict[str, typing.Any]:
        return dict(self._options)

    @property
    def response(self) -> Response | None:
        return self._response

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    def _check_unused(self) -> None:
        if self._consumed:
            raise RequestReusedError(
                "This Request has already been sent. Create a new Request for each call."
            )

    # ------------------------------------------------------------------
    # Staging
    # ------------------------------------------------------------------

    def set(
        self,
        parameter: str | typing.Mapping[str, typing.Any],
        value: typing.Any = None,
    ) -> Request:
        """Stage one parameter, or replace all staged parameters with a mapping."""
        self._check_unused()
        if isinstance(parameter, typing.Mapping):
            self._parameters = dict(parameter)
        else:
            self._parameters[parameter] = value
        return self

    def set_base_url(self, base_url: typing.Any) -> Request:
        self._base_url = base_url
        return self

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def get(self, url: str, header: HeaderTypes | None = None) -> Response:
        return self.request(GET, url, header)

    def post(self, url: str, header: HeaderTypes | None = None, body: Body | None = None) -> Response:
        return self.request(POST, url, header, body)

    def put(self, url: str, header: HeaderTypes | None = None, body: Body | None = None) -> Response:
        return self.request(PUT, url, header, body)

    def patch(self, url: str, header: HeaderTypes | None = None, body: Body | None = None) -> Response:
        return self.request(PATCH, url, header, body)

    def delete(self, url: str, header: HeaderTypes | None = None, body: Body | None = None) -> Response:
        return self.request(DELETE, url, header, body)

    def request(
        self,
        method: str,
        url: str,
        header: HeaderTypes | None = None,
        body: Body | None = None,
    ) -> Response:
        self._check_unused()
        self._consumed = True
        if header is not None and not isinstance(header, Header):
            header = Header(header)
        return (
            self.set_url(self.build_url(url))
            .set_custom_request(method)
            .set_header(header)
            .set_fields(header, body)
            ._set_default_options()
            ._send(header)
        )

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def build_url(self, template: str) -> str:
        """Fill ``{key}`` placeholders, then append unused parameters as a query."""
        url = template
        leftovers = dict(self._parameters)
        for key, value in self._parameters.items():
            placeholder = f"{{{key}}}"
            if placeholder in url:
                url = url.replace(placeholder, stringify(value))
                del leftovers[key]
        query = f"?{build_query(leftovers)}" if leftovers else ""
        resolved = f"{self._base_url}{url}{query}"
        logger.debug("Resolved %r to %s", template, resolved)
        return resolved

    def set_url(self, url: str) -> Request:
        self._options["url"] = url
        return self

    def set_custom_request(self, method: str) -> Request:
        self._options["method"] = method.upper()
        return self

    def set_header(self, header: Header | None = None) -> Request:
        if header is not None:
            self._options["headers"] = tuple(header.to_list())
        return self

    def set_fields(self, header: Header | None = None, body: Body | None = None) -> Request:
        if body is None:
            return self
        content_type = (
            ContentType.parse(header.get(Header.CONTENT_TYPE))
            if header is not None
            else ContentType.JSON
        )
        if content_type is None:
            logger.debug("No known Content-Type in %r, sending no body", header)
            return self
        self._options["fields"] = content_type.encode_body(body)
        return self

    def _set_default_options(self) -> Request:
        self._options.update(
            return_transfer=True,
            fresh_connect=True,
            connect_timeout=CONNECT_TIMEOUT,
            timeout=TIMEOUT,
            encoding="",
        )
        return self

    def _send(self, header: Header | None = None) -> Response:
        options = TransportOptions(**self._options)
        logger.debug("%s %s", options.method, options.url)
        with self._transport.open() as handle:
            result = handle.execute(options)
        self._response = self._decode(result, header)
        return self._response

    def _decode(self, result: TransportResult, header: Header | None) -> Response:
        if result.error_code:
            logger.warning(
                "%s %s failed: [%d] %s",
                self._options.get("method"),
                self._options.get("url"),
                result.error_code,
                result.error_message,
            )
            raise TransportError(
                result.error_message, result.error_code, url=self._options.get("url")
            )

        response = Response()
        accept = (
            ContentType.parse(header.get(Header.ACCEPT))
            if header is not None
            else ContentType.JSON
        )
        if accept is not None:
            response.set_data(accept.decode_payload(result.content))
        response.set_info(result.info)
        return response
