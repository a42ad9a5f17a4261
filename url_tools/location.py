"""Lookup the current location (the page URL a browser would resolve against)."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional

from .constants import LOCATION_ENV
from .errors import URLLocationError

if TYPE_CHECKING:
    from .types import TLocationProvider


def get_current_location(provider: Optional[TLocationProvider] = None) -> str:
    """Return the current location from the given provider or the environment.

    :param provider: a callable which returns the current location
    :raises URLLocationError: if no location is available

    """
    location = provider() if provider is not None else os.environ.get(LOCATION_ENV) or None
    if location is None:
        raise URLLocationError(
            f"Current location is not configured, set `URL.location_provider` or `{LOCATION_ENV}`"
        )

    return str(location)
