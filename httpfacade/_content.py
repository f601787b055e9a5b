from __future__ import annotations

import enum
import json
import logging
import typing

from ._body import Body
from ._urlencode import parse_query, url_decode

logger = logging.getLogger(__name__)

Payload = typing.Union[typing.Dict[str, typing.Any], typing.List[typing.Any], str]
Fields = typing.Union[str, bytes, typing.Dict[str, typing.Any], None]


class ContentType(str, enum.Enum):
    """Wire formats understood for request bodies and responses."""

    TEXT = "text/plain"
    HTML = "text/html"
    JSON = "application/json"
    FORM_DATA = "multipart/form-data"
    URL_ENCODED = "application/x-www-form-urlencoded"

    @classmethod
    def parse(cls, value: str | ContentType | None) -> ContentType | None:
        """Map a header value such as ``"application/json; charset=utf-8"``.

        Returns ``None`` for missing or unrecognised media types.
        """
        if value is None:
            return None
        if isinstance(value, ContentType):
            return value
        media_type = value.split(";")[0].strip().lower()
        try:
            return cls(media_type)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value

    def encode_body(self, body: Body) -> Fields:
        return _CODECS[self].encode(body)

    def decode_payload(self, raw: str) -> Payload:
        return _CODECS[self].decode(raw)


def _decode_json(raw: str) -> Payload:
    if not raw:
        return {}
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug("Response is not valid JSON, using an empty payload")
        return {}
    if not isinstance(decoded, (dict, list)):
        logger.debug("JSON response is a bare %s, using an empty payload", type(decoded).__name__)
        return {}
    return decoded


def _decode_url_encoded(raw: str) -> Payload:
    return parse_query(raw) if raw else {}


class Codec(typing.NamedTuple):
    encode: typing.Callable[[Body], Fields]
    decode: typing.Callable[[str], Payload]


_CODECS: dict[ContentType, Codec] = {
    ContentType.JSON: Codec(Body.to_json, _decode_json),
    ContentType.URL_ENCODED: Codec(Body.to_url_encoded, _decode_url_encoded),
    ContentType.FORM_DATA: Codec(Body.to_form_data, url_decode),
    ContentType.HTML: Codec(lambda body: body.get("html"), lambda raw: {"html": raw}),
    ContentType.TEXT: Codec(lambda body: body.get("text"), lambda raw: {"text": raw}),
}
