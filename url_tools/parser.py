"""Classify and decompose URL strings."""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from .constants import ABSOLUTE, RELATIVE

URL_TYPE_RE = re.compile(
    r"""
    ^(?:
        (?P<absolute>https?://|//)  # scheme or scheme-relative
    |
        (?P<relative>/|\?|\#)  # path, query or hash
    |
        [^;:@=.\s]  # bare path segment
    )
    """,
    flags=re.IGNORECASE | re.VERBOSE,
)

URL_ABSOLUTE_RE = re.compile(
    r"""
    ^(?:(?P<scheme>https?)://|//)
    (?:(?P<user_info>[^:@\s]+:?[^:@\s]+?)@)?
    (?P<host>
        localhost
    |
        (?:[^;:@=/?.\s]+\.)+[A-Za-z0-9\-]{2,}
    )
    (?::(?P<port>\d+))?
    (?=/|\?|\#|$)
    (?P<path>[^?\#]+)?
    (?:\?(?P<query>[^\#]+))?
    (?:\#(?P<hash>.+))?
    """,
    flags=re.IGNORECASE | re.VERBOSE,
)

URL_RELATIVE_RE = re.compile(
    r"""
    ^(?P<path>[^?\#]+)?
    (?:\?(?P<query>[^\#]+))?
    (?:\#(?P<hash>.+))?
    """,
    flags=re.VERBOSE,
)


class URLParts(NamedTuple):
    """Decomposed URL fields."""

    kind: Optional[str] = None
    scheme: Optional[str] = None
    user_info: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None
    query: str = ""
    hash: Optional[str] = None


def classify(url: str) -> Optional[str]:
    """Guess the kind of the given URL string by its leading characters.

    Return `ABSOLUTE`, `RELATIVE` or `None` when the string is not recognized
    (e.g. it starts with a dot or a colon).
    """
    match = URL_TYPE_RE.match(url)
    if match is None:
        return None

    return ABSOLUTE if match.group("absolute") else RELATIVE


def parse_absolute(url: str) -> Optional[URLParts]:
    match = URL_ABSOLUTE_RE.match(url)
    if match is None:
        return None

    scheme, user_info, host, port, path, query, hash_ = match.groups()
    return URLParts(
        kind=ABSOLUTE,
        scheme=scheme.lower() if scheme else None,
        user_info=user_info,
        host=host.lower(),
        port=int(port) if port else None,
        path=path or "/",
        query=query or "",
        hash=hash_,
    )


def parse_relative(url: str) -> Optional[URLParts]:
    match = URL_RELATIVE_RE.match(url)
    if match is None:
        return None

    path, query, hash_ = match.groups()
    return URLParts(kind=RELATIVE, path=path, query=query or "", hash=hash_)


def parse_url(url: Optional[str], kind: Optional[str] = None) -> Optional[URLParts]:
    """Parse the given string into URL parts.

    Reasonable defaults are applied to the parts which weren't present,
    e.g. ``http://example.com`` has the path ``/``.

    :param url: the URL string to parse
    :param kind: skip classification and parse as `ABSOLUTE` or `RELATIVE`
    :return: the parsed parts or ``None`` when the string is not a valid URL

    """
    if not isinstance(url, str):
        return None

    url = url.strip()
    if not url:
        return None

    if kind is None:
        kind = classify(url)

    if kind == ABSOLUTE:
        return parse_absolute(url)

    if kind == RELATIVE:
        return parse_relative(url)

    return parse_absolute(url) or parse_relative(url)
