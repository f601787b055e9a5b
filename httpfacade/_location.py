from __future__ import annotations

import logging
import re
import typing

logger = logging.getLogger(__name__)

ABSOLUTE_URI_REGEX = re.compile(r"^(?:[a-z]+:)?//", re.IGNORECASE)


class BaseUri:
    """Base URI shared by every :class:`Location` created from it.

    Set it once at startup, before any worker thread renders a location.
    Updates are visible to locations built earlier since they hold a
    reference to this object, not a copy of its value.
    """

    def __init__(self, uri: str = "") -> None:
        self._uri = ""
        self.set_base_uri(uri)

    def set_base_uri(self, uri: str) -> None:
        self._uri = uri.rstrip("/")

    def get_base_uri(self) -> str:
        return self._uri

    def location(self, uri: str) -> Location:
        return Location(uri, self)

    def __str__(self) -> str:
        return self._uri

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._uri!r})"


class Location:
    """A request target, either absolute or relative to a :class:`BaseUri`.

    >>> base = BaseUri("www.example.com/api/")
    >>> str(Location("/users/1", base))
    'www.example.com/api/users/1'
    >>> str(Location("https://example.org/x", base))
    'https://example.org/x'
    """

    def __init__(self, uri: str, base: BaseUri | None = None) -> None:
        self._uri = uri.strip("/")
        self._base = base if base is not None else BaseUri()

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def base(self) -> BaseUri:
        return self._base

    def is_absolute(self) -> bool:
        return ABSOLUTE_URI_REGEX.match(self._uri) is not None

    def is_relative(self) -> bool:
        return not self.is_absolute()

    def build_uri(self) -> str:
        base_uri = self._base.get_base_uri()
        if not base_uri:
            logger.debug("Rendering %r without a base URI", self._uri)
        return f"{base_uri}/{self._uri}"

    def __str__(self) -> str:
        if self.is_absolute():
            return self._uri
        return self.build_uri()

    def __eq__(self, other: typing.Any) -> bool:
        if isinstance(other, (Location, str)):
            return str(self) == str(other)
        return NotImplemented

    # Equality follows the mutable base URI.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._uri!r})"
