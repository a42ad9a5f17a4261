"""URL-Tools includes a `url_tools.URL` class which parses, validates, mutates and resolves
URLs the way a browser does on a web page.
"""

from __future__ import annotations

from copy import copy
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from multidict import MultiDictProxy

from .constants import ABSOLUTE, RELATIVE
from .errors import URLLocationError
from .location import get_current_location
from .logs import logger
from .parser import URLParts, parse_url
from .paths import normalize_path
from .query import QueryCache, replace_values, to_multidict

if TYPE_CHECKING:
    from .types import TLocationProvider, TQueryMapping, TQueryValue, TURLLike

__all__ = ("URL", "make_url", "normalize", "reduce", "resolve")

AUTHORITY_PARTS = ("scheme", "user_info", "host", "port")
MUTABLE_PARTS = (*AUTHORITY_PARTS, "path", "query_string", "query", "hash")


def make_url(parts: URLParts) -> str:
    """Serialize the given parts into a URL string."""
    chunks: list[str] = []
    path = parts.path or ""

    if parts.kind == ABSOLUTE:
        chunks.append(f"{parts.scheme}://" if parts.scheme else "//")
        chunks.append(make_authority(parts))
        if path and not path.startswith("/"):
            path = f"/{path}"

    # a relative path must not read as a scheme-relative authority
    elif path.startswith("//"):
        path = f"/.{path}"

    chunks.append(path)
    if parts.query:
        chunks.append(f"?{parts.query}")

    if parts.hash:
        chunks.append(f"#{parts.hash}")

    return "".join(chunks)


def make_authority(parts: URLParts) -> str:
    return "".join(
        (
            f"{parts.user_info}@" if parts.user_info else "",
            parts.host or "",
            f":{parts.port}" if parts.port else "",
        )
    )


class URL:
    """Represent a URL.

    The URL is parsed on creation and re-parsed after every change, so it is always
    either consistent with its string form or marked as invalid. Malformed URLs never
    raise, check :attr:`is_valid` before trusting the parts.

    :param url: a URL string or another URL instance to copy
    :param resolve_location: resolve the URL against the current location
                             (see :meth:`get_current_location`)

    .. code-block:: python

        url = URL("http://example.com/a/b?q=1", resolve_location=False)
        assert url.host == "example.com"
        assert url.get_query("q") == "1"
        assert str(url.resolve("../c")) == "http://example.com/c"

    """

    ABSOLUTE: ClassVar[str] = ABSOLUTE
    RELATIVE: ClassVar[str] = RELATIVE

    # A callable which returns the current location, `URL_TOOLS_LOCATION` env is used otherwise
    location_provider: ClassVar[Optional[TLocationProvider]] = None

    __slots__ = ("_original", "_parts", "_query", "_is_valid")

    def __init__(self, url: TURLLike = None, *, resolve_location: bool = True):
        """Parse the given URL and resolve it against the current location if required."""
        if url is not None and not isinstance(url, str):
            url = str(url)

        self._original: Optional[str] = url
        self._parts = URLParts()
        self._query = QueryCache()
        self._is_valid = False
        self._commit(parse_url(url), url)

        if resolve_location and self._is_valid:
            location = self.get_current_location()
            logger.debug("Resolve %r against the current location %r", url, str(location))
            self._load(location.resolve(self))

    def __str__(self) -> str:
        """Return the formatted URL."""
        return make_url(self._parts._replace(query=self._query.raw))

    def __repr__(self) -> str:
        """Represent the URL."""
        return f"<{self.__class__.__name__} '{self}'>"

    def __eq__(self, other: object) -> bool:
        """Compare URLs by their string forms."""
        if isinstance(other, URL):
            return self._is_valid == other._is_valid and str(self) == str(other)

        if isinstance(other, str):
            return str(self) == other

        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> URL:
        """Copy the URL to a new one."""
        url = self.__class__.__new__(self.__class__)
        url._original = self._original
        url._load(self)
        return url

    @classmethod
    def normalize(cls, url: TURLLike, *, resolve_location: bool = True) -> str:
        """Parse the given URL and return the formatted string."""
        return str(cls(url, resolve_location=resolve_location))

    @classmethod
    def get_current_location(cls) -> URL:
        """Return the current location which relative URLs are resolved against.

        Override :attr:`location_provider` to inject the location of your environment.

        :raises URLLocationError: if the location is not configured or is not a valid URL
        """
        location = cls(get_current_location(cls.location_provider), resolve_location=False)
        if not location.is_valid:
            raise URLLocationError(f"Current location is not a valid URL: {location.original!r}")

        return location

    # Accessors
    # ---------

    @property
    def original(self) -> Optional[str]:
        """The string the URL was created from."""
        return self._original

    @property
    def is_valid(self) -> bool:
        """Whether the last parsing produced something valid."""
        return self._is_valid

    @property
    def kind(self) -> Optional[str]:
        """Either `URL.ABSOLUTE`, `URL.RELATIVE` or None for invalid URLs."""
        return self._parts.kind

    @property
    def is_absolute(self) -> bool:
        """The URL is absolute if it has a host (with a scheme or scheme-relative)."""
        return self._parts.kind == ABSOLUTE

    @property
    def is_relative(self) -> bool:
        """The URL is relative if it doesn't contain a host."""
        return self._parts.kind == RELATIVE

    @property
    def is_host_relative(self) -> bool:
        """The URL is host-relative if it's relative and the path begins with '/'."""
        path = self._parts.path
        return self.is_relative and bool(path) and path.startswith("/")  # type: ignore[union-attr]

    @property
    def scheme(self) -> Optional[str]:
        return self._parts.scheme

    @scheme.setter
    def scheme(self, scheme: Optional[str]):
        self._set(scheme=scheme)

    @property
    def user_info(self) -> Optional[str]:
        """User info (``user[:password]``), only valid for absolute URLs."""
        return self._parts.user_info

    @user_info.setter
    def user_info(self, user_info: Optional[str]):
        self._set(user_info=user_info)

    @property
    def host(self) -> Optional[str]:
        """The host name, if set it must be valid otherwise the URL becomes invalid."""
        return self._parts.host

    @host.setter
    def host(self, host: Optional[str]):
        self._set(host=host)

    @property
    def port(self) -> Optional[int]:
        return self._parts.port

    @port.setter
    def port(self, port: Optional[int]):
        self._set(port=port)

    @property
    def path(self) -> Optional[str]:
        return self._parts.path

    @path.setter
    def path(self, path: Optional[str]):
        self._set(path=path)

    @property
    def hash(self) -> Optional[str]:
        """The fragment, without '#'."""
        return self._parts.hash

    @hash.setter
    def hash(self, hash_: Optional[str]):
        self._set(hash=hash_)

    @property
    def query_string(self) -> str:
        """The query string, without '?'."""
        return self._query.raw

    @query_string.setter
    def query_string(self, query_string: Optional[str]):
        self._query.raw = query_string
        self._set()

    @property
    def query(self) -> MultiDictProxy[str]:
        """A lazy property that decodes the query string and returns it as a read-only
        :py:class:`multidict.MultiDictProxy`.

        Assign a mapping to replace all the parameters.

        :raises URLDecodeError: if the query string is malformed
        """
        return MultiDictProxy(self._query.params)

    @query.setter
    def query(self, query: Optional[TQueryMapping]):
        self._query.params = to_multidict(query)
        self._set()

    def get_query(self, key: str) -> Optional[TQueryValue]:
        """Get a decoded query parameter, a list is returned if the key is repeated."""
        values = self._query.params.getall(key, [])
        if not values:
            return None

        return values[0] if len(values) == 1 else values

    def set_query(self, key: str, value: TQueryValue) -> URL:
        """Replace all values of the given query parameter."""
        self._query.params = replace_values(self._query.params, key, value)
        return self._set()

    @property
    def domain(self) -> Optional[str]:
        """The last two labels of the host, e.g. foo.example.com -> example.com"""
        host = self._parts.host
        return ".".join(host.split(".")[-2:]) if host else None

    @property
    def authority(self) -> str:
        """The user info, host and port combined."""
        return make_authority(self._parts)

    @property
    def origin(self) -> Optional[str]:
        """The scheme, host and port of a valid absolute URL, None otherwise."""
        if not (self._is_valid and self.is_absolute):
            return None

        parts = self._parts
        scheme = f"{parts.scheme}://" if parts.scheme else "//"
        port = f":{parts.port}" if parts.port else ""
        return f"{scheme}{parts.host}{port}"

    def is_local(self) -> bool:
        """Whether the URL points to the origin of the current location.

        A scheme-relative URL takes the scheme of the current location.
        """
        if not self._is_valid:
            return False

        if self.is_relative:
            return True

        location = self.get_current_location()
        origin = self.origin
        if not self.scheme and location.scheme:
            origin = f"{location.scheme}:{origin}"

        return origin == location.origin

    def replace(self, **parts: Any) -> URL:
        """Return a new URL with the given parts changed.

        The parts are applied at once, so the new URL is parsed only one time.

        .. code-block:: python

            url = URL("http://example.com/a", resolve_location=False)
            assert str(url.replace(scheme="https", port=8443)) == "https://example.com:8443/a"

        """
        unknown = set(parts) - set(MUTABLE_PARTS)
        if unknown:
            raise TypeError(f"Unknown URL parts: {', '.join(sorted(unknown))}")

        url = copy(self)
        if "query" in parts:
            url._query.params = to_multidict(parts.pop("query"))

        if "query_string" in parts:
            url._query.raw = parts.pop("query_string")

        return url._set(**parts)

    # Navigation
    # ----------

    def resolve(self, url: TURLLike) -> URL:
        """Return a new URL resolving the given one against this (the base).

        A blank string is an empty reference, which gives the base authority only.
        If this or the given URL is invalid the base is returned unchanged.

        :param url: the URL string, or URL instance to resolve
        """
        empty = isinstance(url, str) and not url.strip()
        ref = url if isinstance(url, URL) else self.__class__(url, resolve_location=False)

        # Resolving invalid URLs is tolerated, the result is the base itself
        if not (self._is_valid and (empty or ref.is_valid)):
            logger.debug("Can't resolve %r against %r", ref.original, str(self))
            return copy(self)

        if not empty and ref.is_absolute:
            if self.is_absolute and not ref.scheme:
                return ref.replace(scheme=self.scheme)
            return copy(ref)

        ref_path, ref_query, ref_hash = (
            (None, "", None) if empty else (ref.path, ref.query_string, ref.hash)
        )
        base = self._parts
        parts = (
            base._replace(path=None, query="", hash=None) if self.is_absolute else URLParts()
        )

        if ref_path:
            path = ref_path
            if base.path and not ref_path.startswith("/"):
                path = base.path[: base.path.rfind("/") + 1] + ref_path
            parts = parts._replace(path=normalize_path(path), query=ref_query, hash=ref_hash)

        elif ref_query:
            parts = parts._replace(path=base.path, query=ref_query, hash=ref_hash)

        elif ref_hash:
            parts = parts._replace(path=base.path, query=self.query_string, hash=ref_hash)

        resolved = copy(self)
        url = make_url(parts)
        resolved._commit(parse_url(url), url)
        return resolved

    def reduce(self, url: TURLLike) -> URL:
        """Return a new URL reduced to the shortest form relative to this (the base).

        This is the opposite of :meth:`resolve`. A path starting with ``//`` has no
        host-relative form, so such URLs are returned absolute.

        :param url: the URL string, or URL instance to reduce
        """
        reduced = self.resolve(url)
        if (
            self.is_absolute
            and reduced.is_absolute
            and reduced.scheme == self.scheme
            and reduced.authority == self.authority
            and not (reduced.path or "").startswith("//")
        ):
            reduced._set(scheme=None, user_info=None, host=None, port=None)

        return reduced

    # Internals
    # ---------

    def _set(self, **changes: Any) -> URL:
        """Update the given parts, then format the URL and parse it again."""
        parts = self._parts._replace(query=self._query.raw, **changes)

        kind = parts.kind
        if any(changes.get(name) for name in AUTHORITY_PARTS):
            kind = ABSOLUTE

        if "host" in changes and not changes["host"]:
            kind = RELATIVE

        url = make_url(parts._replace(kind=kind))
        self._commit(parse_url(url), url)
        return self

    def _commit(self, parts: Optional[URLParts], url: Optional[str]):
        if parts is None:
            logger.debug("Invalid URL: %r", url)
            self._parts = URLParts()
            self._query = QueryCache()
            self._is_valid = False
            return

        # Keep decoded parameters when the query is unchanged
        if parts.query != self._query.raw:
            self._query = QueryCache(parts.query)

        self._parts = parts
        self._is_valid = True

    def _load(self, url: URL):
        self._parts = url._parts
        self._query = QueryCache(url._query.raw)
        self._is_valid = url._is_valid


def normalize(url: TURLLike, *, resolve_location: bool = False) -> str:
    """Parse the given URL and return the formatted string.

    Unlike :meth:`URL.normalize`, relative URLs are kept relative unless
    ``resolve_location`` is set, like :func:`resolve` and :func:`reduce` which never
    look at the current location.
    """
    return URL.normalize(url, resolve_location=resolve_location)


def resolve(base: TURLLike, url: TURLLike) -> str:
    """Return the given URL resolved against the base, as a browser would do it.

    .. code-block:: python

        assert resolve("http://example.com/a/b", "c") == "http://example.com/a/c"

    """
    return str(URL(base, resolve_location=False).resolve(url))


def reduce(base: TURLLike, url: TURLLike) -> str:
    """Return the given URL reduced to the shortest form relative to the base."""
    return str(URL(base, resolve_location=False).reduce(url))


# ruff: noqa: A003
