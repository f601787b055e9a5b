from __future__ import annotations

import contextlib
import dataclasses
import logging
import time
import typing

import httpx

from ._headers import parse_header
from ._models import TransferInfo
from ._urlencode import flatten

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 10.0
TIMEOUT = 40.0

# libcurl error numbers, so callers can branch on codes independently of
# the transport that produced them.
E_UNSUPPORTED_PROTOCOL = 1
E_FAILED = 2
E_URL_MALFORMAT = 3
E_COULDNT_RESOLVE_PROXY = 5
E_COULDNT_RESOLVE_HOST = 6
E_COULDNT_CONNECT = 7
E_WEIRD_SERVER_REPLY = 8
E_OPERATION_TIMEDOUT = 28
E_SEND_ERROR = 55
E_RECV_ERROR = 56
E_BAD_CONTENT_ENCODING = 61

_ERROR_CODES: tuple[tuple[type[Exception], int], ...] = (
    (httpx.UnsupportedProtocol, E_UNSUPPORTED_PROTOCOL),
    (httpx.TimeoutException, E_OPERATION_TIMEDOUT),
    (httpx.ProxyError, E_COULDNT_RESOLVE_PROXY),
    (httpx.ConnectError, E_COULDNT_CONNECT),
    (httpx.WriteError, E_SEND_ERROR),
    (httpx.ReadError, E_RECV_ERROR),
    (httpx.RemoteProtocolError, E_WEIRD_SERVER_REPLY),
    (httpx.DecodingError, E_BAD_CONTENT_ENCODING),
)

_RESOLVE_HINTS = ("name or service not known", "getaddrinfo", "nodename nor servname")

Fields = typing.Union[str, bytes, typing.Mapping[str, typing.Any], None]


@dataclasses.dataclass(frozen=True)
class TransportOptions:
    """Everything a transport needs to execute one call."""

    url: str = ""
    method: str = "GET"
    headers: tuple[str, ...] | None = None
    fields: Fields = None
    return_transfer: bool = True
    fresh_connect: bool = True
    connect_timeout: float = CONNECT_TIMEOUT
    timeout: float = TIMEOUT
    encoding: str | None = ""


@dataclasses.dataclass(frozen=True)
class TransportResult:
    content: str = ""
    info: TransferInfo = dataclasses.field(default_factory=TransferInfo)
    error_code: int = 0
    error_message: str = ""


class TransportHandle(typing.Protocol):
    def execute(self, options: TransportOptions) -> TransportResult: ...


class Transport(typing.Protocol):
    def open(self) -> typing.ContextManager[TransportHandle]: ...


def error_code_for(exc: Exception) -> int:
    if isinstance(exc, httpx.InvalidURL):
        return E_URL_MALFORMAT
    if isinstance(exc, httpx.ConnectError):
        message = str(exc).lower()
        if any(hint in message for hint in _RESOLVE_HINTS):
            return E_COULDNT_RESOLVE_HOST
    for exc_type, code in _ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return E_FAILED


def _is_file_content(value: typing.Any) -> bool:
    return isinstance(value, (bytes, bytearray)) or hasattr(value, "read")


def _is_file(value: typing.Any) -> bool:
    # httpx file tuples: (filename, content[, content_type[, headers]])
    if isinstance(value, tuple):
        return len(value) >= 2 and _is_file_content(value[1])
    return _is_file_content(value)


def multipart_files(fields: typing.Mapping[str, typing.Any]) -> list[tuple[str, typing.Any]]:
    """Turn form fields into httpx ``files`` entries.

    Plain values become unnamed parts so httpx always sends
    ``multipart/form-data``, even when no real file is attached.
    """
    files: list[tuple[str, typing.Any]] = []
    for key, value in fields.items():
        if _is_file(value):
            files.append((key, value))
            continue
        for name, scalar in flatten({key: value}):
            if scalar is True or scalar is False:
                scalar = int(scalar)
            files.append((name, (None, str(scalar).encode("utf-8"))))
    return files


class HttpxHandle:
    """One open ``httpx.Client``, valid inside :meth:`HttpxTransport.open`."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def _build_headers(self, options: TransportOptions) -> list[tuple[str, str]]:
        headers = [parse_header(line) for line in options.headers or ()]
        if isinstance(options.fields, typing.Mapping):
            # httpx has to generate the boundary itself.
            headers = [
                (name, value)
                for name, value in headers
                if name.lower() != "content-type" or "boundary=" in value
            ]
        names = {name.lower() for name, _ in headers}
        if options.encoding and "accept-encoding" not in names:
            headers.append(("Accept-Encoding", options.encoding))
        if options.fresh_connect and "connection" not in names:
            headers.append(("Connection", "close"))
        return headers

    def _failure(
        self, options: TransportOptions, code: int, message: str, start: float
    ) -> TransportResult:
        logger.debug("%s %s failed with code %d: %s", options.method, options.url, code, message)
        return TransportResult(
            info=TransferInfo(url=options.url, total_time=time.monotonic() - start),
            error_code=code,
            error_message=message,
        )

    def execute(self, options: TransportOptions) -> TransportResult:
        kwargs: dict[str, typing.Any] = {
            "headers": self._build_headers(options),
            "timeout": httpx.Timeout(options.timeout, connect=options.connect_timeout),
        }
        fields = options.fields
        if isinstance(fields, typing.Mapping):
            kwargs["files"] = multipart_files(fields)
        elif isinstance(fields, (bytes, bytearray)):
            kwargs["content"] = bytes(fields)
        elif fields is not None:
            kwargs["content"] = str(fields).encode("utf-8")

        # httpx timeouts apply per phase, the deadline bounds the whole call.
        start = time.monotonic()
        deadline = start + options.timeout
        chunks: list[bytes] = []
        try:
            with self._client.stream(options.method, options.url, **kwargs) as response:
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if time.monotonic() > deadline:
                        return self._failure(
                            options,
                            E_OPERATION_TIMEDOUT,
                            f"Operation timed out after {options.timeout:g} seconds",
                            start,
                        )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            return self._failure(options, error_code_for(exc), str(exc) or type(exc).__name__, start)

        raw = b"".join(chunks)
        info = TransferInfo(
            url=str(response.url),
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
            # elapsed is only available once the stream is closed.
            total_time=response.elapsed.total_seconds(),
            size_download=len(raw),
            redirect_count=len(response.history),
            http_version=response.http_version,
            headers=dict(response.headers),
        )
        content = ""
        if options.return_transfer:
            content = raw.decode(response.encoding or "utf-8", errors="replace")
        return TransportResult(content=content, info=info)


class HttpxTransport:
    """Default :class:`Transport`, backed by ``httpx``.

    Every call opens its own ``httpx.Client`` with keep-alive disabled, so
    no connection outlives the call. Pass ``transport=httpx.MockTransport(...)``
    to serve calls from a handler function instead of the network.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    @contextlib.contextmanager
    def open(self) -> typing.Iterator[HttpxHandle]:
        client = httpx.Client(
            transport=self._transport,
            limits=httpx.Limits(max_keepalive_connections=0),
            follow_redirects=False,
        )
        try:
            yield HttpxHandle(client)
        finally:
            client.close()
