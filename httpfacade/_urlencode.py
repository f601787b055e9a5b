from __future__ import annotations

import re
import typing
from urllib.parse import quote_plus, unquote_plus

_BRACKET_REGEX = re.compile(r"\[([^\[\]]*)\]")

# Same limit as PHP's max_input_nesting_level.
MAX_NESTING = 64


def stringify(value: typing.Any) -> str:
    if value is None:
        return ""
    if value is True:
        return "1"
    if value is False:
        return "0"
    return str(value)


def iter_pairs(
    value: typing.Any, prefix: str
) -> typing.Iterator[tuple[str, typing.Any]]:
    """Flatten nested mappings/sequences into ``(bracketed_key, scalar)`` pairs.

    ``{"a": {"b": [1, 2]}}`` flattens to ``a[b][0]=1`` and ``a[b][1]=2``.
    ``None`` leaves are dropped.
    """
    if value is None:
        return
    if isinstance(value, typing.Mapping):
        for key, item in value.items():
            yield from iter_pairs(item, f"{prefix}[{key}]")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from iter_pairs(item, f"{prefix}[{index}]")
    else:
        yield prefix, value


def flatten(data: typing.Mapping[str, typing.Any]) -> list[tuple[str, typing.Any]]:
    pairs: list[tuple[str, typing.Any]] = []
    for key, value in data.items():
        pairs.extend(iter_pairs(value, str(key)))
    return pairs


def build_query(data: typing.Mapping[str, typing.Any]) -> str:
    """Form-urlencode ``data``, nesting with bracket notation."""
    return "&".join(
        f"{quote_plus(key, safe='')}={quote_plus(stringify(value), safe='')}"
        for key, value in flatten(data)
    )


def _split_key(raw_key: str) -> list[str]:
    head, bracket, rest = raw_key.partition("[")
    if not bracket or not head:
        return [raw_key]
    rest = bracket + rest
    parts = [head]
    pos = 0
    for match in _BRACKET_REGEX.finditer(rest):
        if match.start() != pos:
            break
        if len(parts) > MAX_NESTING:
            # Too deep, the remaining brackets stay part of the last key.
            parts[-1] += rest[pos:]
            return parts
        parts.append(match.group(1))
        pos = match.end()
    if pos != len(rest):
        # Malformed suffix, keep the key verbatim.
        return [raw_key]
    return parts


def _assign(target: dict[str, typing.Any], parts: list[str], value: str) -> None:
    *path, last = parts
    for key in path:
        if key == "":
            key = str(len(target))
        child = target.get(key)
        if not isinstance(child, dict):
            child = {}
            target[key] = child
        target = child
    if last == "":
        last = str(len(target))
    target[last] = value


def _listify(value: typing.Any) -> typing.Any:
    if not isinstance(value, dict):
        return value
    converted = {key: _listify(item) for key, item in value.items()}
    if converted and list(converted) == [str(i) for i in range(len(converted))]:
        return list(converted.values())
    return converted


def parse_query(query: str) -> dict[str, typing.Any]:
    """Parse a query string into a mapping, expanding bracket notation.

    Inverse of :func:`build_query` for string leaves. Containers whose keys
    are exactly ``0..n-1`` come back as lists. Later duplicates of a plain
    key overwrite earlier ones.
    """
    result: dict[str, typing.Any] = {}
    for chunk in query.lstrip("?").split("&"):
        if not chunk:
            continue
        raw_key, _, raw_value = chunk.partition("=")
        key = unquote_plus(raw_key)
        if not key:
            continue
        _assign(result, _split_key(key), unquote_plus(raw_value))
    return {key: _listify(value) for key, value in result.items()}


def url_decode(value: str) -> str:
    return unquote_plus(value)
