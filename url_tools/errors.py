from __future__ import annotations


class URLToolsError(Exception):
    """Base class for URL-Tools Errors."""


class URLDecodeError(URLToolsError, ValueError):
    """URL-Tools query decoding error."""


class URLLocationError(URLToolsError, RuntimeError):
    """Raise when the current location is required but not configured."""
