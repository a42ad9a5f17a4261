""" URL-Tools -- Parse, mutate, resolve and reduce URLs the way browsers do """
from __future__ import annotations

from .constants import ABSOLUTE, RELATIVE
from .errors import URLDecodeError, URLLocationError, URLToolsError
from .parser import URLParts, classify, parse_url
from .paths import normalize_path
from .query import make_query_string, parse_query_string
from .url import URL, normalize, reduce, resolve

__all__ = (
    # Constants
    "ABSOLUTE",
    "RELATIVE",
    # Errors
    "URLDecodeError",
    "URLLocationError",
    "URLToolsError",
    # URL
    "URL",
    "URLParts",
    # Navigation
    "normalize",
    "reduce",
    "resolve",
    # Utils
    "classify",
    "make_query_string",
    "normalize_path",
    "parse_query_string",
    "parse_url",
)
