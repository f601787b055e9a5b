from __future__ import annotations

import typing

HeaderTypes = typing.Union[
    "Header",
    typing.Mapping[str, str],
    typing.Sequence[typing.Tuple[str, str]],
]


def parse_header(header: str) -> tuple[str, str]:
    """Parse a ``'Name: value'`` line."""
    if ":" not in header:
        raise ValueError(f"Invalid header format: '{header}'. Expected 'Name: value'.")
    name, _, value = header.partition(":")
    return name.strip(), value.strip()


class Header:
    """Ordered list of request headers with case-insensitive lookup.

    Names keep the casing they were added with, so :meth:`to_list` sends
    them exactly as given.
    """

    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"

    def __init__(self, headers: HeaderTypes | None = None) -> None:
        self._items: list[tuple[str, str]] = []
        if isinstance(headers, Header):
            self._items = list(headers._items)
        elif isinstance(headers, typing.Mapping):
            for name, value in headers.items():
                self.set(name, value)
        elif headers is not None:
            for name, value in headers:
                self.set(name, value)

    @classmethod
    def from_lines(cls, lines: typing.Iterable[str]) -> Header:
        return cls([parse_header(line) for line in lines])

    def get(self, name: str, default: str | None = None) -> str | None:
        lowered = name.lower()
        for key, value in self._items:
            if key.lower() == lowered:
                return value
        return default

    def set(self, name: str, value: str) -> None:
        lowered = name.lower()
        for index, (key, _) in enumerate(self._items):
            if key.lower() == lowered:
                self._items[index] = (key, str(value))
                return
        self._items.append((name, str(value)))

    def remove(self, name: str) -> None:
        lowered = name.lower()
        self._items = [(k, v) for k, v in self._items if k.lower() != lowered]

    def to_list(self) -> list[str]:
        return [f"{name}: {value}" for name, value in self._items]

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> typing.Iterator[str]:
        return (name for name, _ in self._items)

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, Header):
            return False
        return [(k.lower(), v) for k, v in self._items] == [
            (k.lower(), v) for k, v in other._items
        ]

    # Mutable, so unhashable.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({dict(self._items)!r})"
