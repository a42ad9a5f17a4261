"""Query string codec and the lazy raw/decoded query cache."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional, Union
from urllib.parse import quote, unquote_to_bytes

from multidict import MultiDict, MultiDictProxy

from .constants import DEFAULT_CHARSET, QUERY_SAFE_CHARS
from .errors import URLDecodeError

if TYPE_CHECKING:
    from .types import TQueryMapping, TQueryValue


MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_query_part(value: str) -> str:
    """Percent-encode the given key or value the way `encodeURIComponent` does."""
    return quote(str(value), safe=QUERY_SAFE_CHARS)


def decode_query_part(value: str) -> str:
    """Decode the given key or value, a plus sign stands for a space.

    :raises URLDecodeError: on a malformed escape or an invalid UTF-8 sequence
    """
    value = value.replace("+", " ")
    if MALFORMED_ESCAPE_RE.search(value):
        raise URLDecodeError(f"Malformed escape sequence: {value!r}")

    try:
        return unquote_to_bytes(value).decode(DEFAULT_CHARSET)
    except UnicodeDecodeError as exc:
        raise URLDecodeError(f"Invalid {DEFAULT_CHARSET} sequence: {value!r}") from exc


def parse_query_string(query_string: str) -> MultiDict[str]:
    """Parse the given query string (without ``?``) into a multi-dict.

    Order of the parameters is kept, parameters with an empty name are skipped.

    .. code-block:: python

        assert parse_query_string("foo=bar&foo=baz&q").getall("foo") == ["bar", "baz"]

    """
    query: MultiDict[str] = MultiDict()
    if not query_string:
        return query

    for chunk in query_string.split("&"):
        key, _, value = chunk.partition("=")
        key = decode_query_part(key)
        if key:
            query.add(key, decode_query_part(value))

    return query


def make_query_string(query: Optional[MultiDict[str]]) -> str:
    """Encode the given multi-dict, every repeated key gets its own pair."""
    if not query:
        return ""

    return "&".join(
        f"{encode_query_part(key)}={encode_query_part(value)}" for key, value in query.items()
    )


def to_multidict(query: Union[TQueryMapping, MultiDict, MultiDictProxy, None]) -> MultiDict[str]:
    """Convert the given mapping into a multi-dict, list values become repeated keys."""
    if query is None:
        return MultiDict()

    if isinstance(query, (MultiDict, MultiDictProxy)):
        return MultiDict(query)

    items = query.items() if hasattr(query, "items") else query
    result: MultiDict[str] = MultiDict()
    for key, value in items:
        if isinstance(value, (list, tuple)):
            for item in value:
                result.add(key, str(item))
        else:
            result.add(key, str(value))

    return result


def replace_values(query: MultiDict[str], key: str, value: TQueryValue) -> MultiDict[str]:
    """Return a copy of the query where all values of the key are replaced.

    The new values take the place of the first occurrence of the key or go to the end.
    """
    values = [str(v) for v in value] if isinstance(value, (list, tuple)) else [str(value)]
    result: MultiDict[str] = MultiDict()
    inserted = False
    for name, current in query.items():
        if name != key:
            result.add(name, current)
        elif not inserted:
            inserted = True
            for item in values:
                result.add(key, item)

    if not inserted:
        for item in values:
            result.add(key, item)

    return result


class QueryCache:
    """Hold a query as a raw string or as decoded parameters.

    Only one form is authoritative at a time, the other one is derived lazily
    and dropped whenever the authoritative form changes.

    """

    __slots__ = ("_raw", "_params")

    def __init__(self, raw: str = ""):
        self._raw: Optional[str] = raw
        self._params: Optional[MultiDict[str]] = None

    def __repr__(self) -> str:
        return f"<QueryCache {self.raw!r}>"

    @property
    def raw(self) -> str:
        if self._raw is None:
            self._raw = make_query_string(self._params)
        return self._raw

    @raw.setter
    def raw(self, raw: Optional[str]):
        self._raw = raw or ""
        self._params = None

    @property
    def params(self) -> MultiDict[str]:
        if self._params is None:
            self._params = parse_query_string(self._raw or "")
        return self._params

    @params.setter
    def params(self, params: MultiDict[str]):
        self._params = params
        self._raw = None
