"""
Case-insensitive string mapping.

Used wherever keys come from a case-insensitive namespace, such as HTTP
header names.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping

from stream_segments._types import ItemVisitor


def normalize_key(key: str) -> str:
    """Return the form a key is stored and looked up under."""
    return key.lower()


class CaseInsensitiveDict(MutableMapping[str, str]):
    """
    A str -> str mapping whose keys compare case-insensitively.

    Keys are stored lowercased, so iteration and `keys()` only ever return
    the normalized form. Setting a differently-cased key replaces the value
    stored under the existing one.

        >>> m = CaseInsensitiveDict({"Content-Length": "12"})
        >>> m["content-length"]
        '12'
        >>> list(m)
        ['content-length']
    """

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = {}
        if data is not None:
            self.update(data)

    def __getitem__(self, key: str) -> str:
        return self._data[normalize_key(key)]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[normalize_key(key)] = value

    def __delitem__(self, key: str) -> None:
        del self._data[normalize_key(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return normalize_key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"

    def visit(self, callback: ItemVisitor) -> None:
        """Call `callback(key, value)` for every entry, with normalized keys."""
        for key, value in list(self._data.items()):
            callback(key, value)

    def copy(self) -> CaseInsensitiveDict:
        return CaseInsensitiveDict(self._data)
