# ruff: noqa: I001
from ._body import Body
from ._client import Client
from ._content import ContentType
from ._exceptions import HTTPFacadeError, RequestReusedError, TransportError
from ._headers import Header
from ._location import BaseUri, Location
from ._models import Response, TransferInfo
from ._request import Request
from ._transports import (
    HttpxTransport,
    Transport,
    TransportHandle,
    TransportOptions,
    TransportResult,
)
from ._urlencode import build_query, parse_query

__title__ = "httpfacade"
__description__ = "Templated URLs and content-type driven codecs over a pluggable HTTP transport."
__version__ = "0.1.0"

try:
    from .cli import main
except ImportError:

    def main() -> None:  # type: ignore[misc]
        import sys

        print(
            'The "httpfacade" command requires the CLI extra. '
            'Install it with: pip install "httpfacade[cli]"',
            file=sys.stderr,
        )
        sys.exit(1)


_EXCLUDED_FROM_ALL = {"cli", "main"}

__all__ = sorted(
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
