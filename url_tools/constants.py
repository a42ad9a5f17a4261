from __future__ import annotations

ABSOLUTE = "absolute"
RELATIVE = "relative"

DEFAULT_CHARSET = "utf-8"

# Characters left unescaped by `encodeURIComponent` besides the ones `quote` always keeps
QUERY_SAFE_CHARS = "!*'()"

LOCATION_ENV = "URL_TOOLS_LOCATION"
