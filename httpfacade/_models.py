from __future__ import annotations

import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class TransferInfo:
    """Metadata the transport reports about one completed transfer."""

    url: str = ""
    status_code: int = 0
    content_type: str | None = None
    total_time: float = 0.0
    size_download: int = 0
    redirect_count: int = 0
    http_version: str = ""
    headers: typing.Mapping[str, str] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, typing.Any]:
        return dataclasses.asdict(self)


class Response:
    """Decoded payload of a call plus its :class:`TransferInfo`.

    ``data`` is a mapping for JSON, URL-encoded, HTML and text responses
    and a string for form-data responses. It is never ``None``.
    """

    def __init__(
        self,
        data: typing.Any = None,
        info: TransferInfo | None = None,
    ) -> None:
        self._data: typing.Any = {} if data is None else data
        self._info = info if info is not None else TransferInfo()

    @property
    def data(self) -> typing.Any:
        return self._data

    @property
    def info(self) -> TransferInfo:
        return self._info

    @property
    def status_code(self) -> int:
        return self._info.status_code

    @property
    def url(self) -> str:
        return self._info.url

    @property
    def elapsed(self) -> float:
        return self._info.total_time

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def set_data(self, data: typing.Any) -> None:
        self._data = {} if data is None else data

    def set_info(self, info: TransferInfo) -> None:
        self._info = info

    def set(self, key: str, value: typing.Any) -> None:
        if not isinstance(self._data, dict):
            self._data = {}
        self._data[key] = value

    def get(self, key: str, default: typing.Any = None) -> typing.Any:
        if isinstance(self._data, dict):
            return self._data.get(key, default)
        return default

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} [{self.status_code}]>"
