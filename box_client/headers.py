"""
Case-insensitive response headers.

This module provides a read-only, multi-valued header mapping used by
response descriptors and API errors.
"""

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
import httpx

HeaderValues = Union[str, bytes, Iterable[Union[str, bytes]]]
HeadersInput = Union[
    httpx.Headers,
    Mapping[Union[str, bytes], HeaderValues],
    Iterable[Tuple[Union[str, bytes], Union[str, bytes]]],
]


def _to_str(value: Union[str, bytes]) -> str:
    # raw header bytes are latin-1, as httpx decodes them
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


class ResponseHeaders(Mapping[str, List[str]]):
    """
    Read-only mapping from header name to the list of its values.

    Lookups ignore case. Iteration yields each header name in the casing
    it was first seen with.

    Example:
        >>> headers = ResponseHeaders({"FOO": "bAr"})
        >>> headers["foo"]
        ['bAr']
    """

    def __init__(self, headers: Optional[HeadersInput] = None):
        """
        Initialize the header mapping.

        Args:
            headers: httpx headers, a mapping of names to one value or a list
                of values, or an iterable of (name, value) pairs
        """
        self._store: Dict[str, Tuple[str, List[str]]] = {}

        if headers is None:
            return

        if isinstance(headers, ResponseHeaders):
            items: Iterable[Tuple[str, HeaderValues]] = [
                (name, values) for name, values in headers._store.values()
            ]
        elif isinstance(headers, httpx.Headers):
            items = headers.multi_items()
        elif isinstance(headers, Mapping):
            items = headers.items()
        else:
            items = headers

        for name, value in items:
            self._add(name, value)

    def _add(self, name: Union[str, bytes], value: HeaderValues) -> None:
        if isinstance(value, (str, bytes)):
            values = [_to_str(value)]
        else:
            values = [_to_str(v) for v in value]
        name = _to_str(name)
        key = name.lower()
        if key in self._store:
            self._store[key][1].extend(values)
        else:
            self._store[key] = (name, values)

    def __getitem__(self, name: str) -> List[str]:
        if not isinstance(name, str):
            raise KeyError(name)
        return list(self._store[name.lower()][1])

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._store

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def first(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value of a header, or default when it is missing."""
        values = self._store.get(name.lower())
        if not values or not values[1]:
            return default
        return values[1][0]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResponseHeaders):
            return {k: v for k, (_, v) in self._store.items()} == {
                k: v for k, (_, v) in other._store.items()
            }
        if isinstance(other, Mapping):
            return self == ResponseHeaders(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"
