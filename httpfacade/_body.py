from __future__ import annotations

import json
import typing

from ._urlencode import build_query


class Body:
    """Ordered field container serialized per request content type.

    >>> body = Body()
    >>> body.add("name", "Ada")
    >>> body.to_json()
    '{"name":"Ada"}'
    >>> body.to_url_encoded()
    'name=Ada'
    """

    def __init__(self, fields: typing.Mapping[str, typing.Any] | None = None) -> None:
        self._content: dict[str, typing.Any] = dict(fields or {})

    def get(self, key: str, default: typing.Any = None) -> typing.Any:
        return self._content.get(key, default)

    def add(self, key: str, value: typing.Any) -> None:
        self._content[key] = value

    def to_json(self) -> str:
        return json.dumps(self._content, separators=(",", ":"))

    def to_url_encoded(self) -> str:
        return build_query(self._content)

    def to_form_data(self) -> dict[str, typing.Any]:
        return dict(self._content)

    def __contains__(self, key: object) -> bool:
        return key in self._content

    def __len__(self) -> int:
        return len(self._content)

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._content)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._content!r})"
