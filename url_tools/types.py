from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Sequence, Union

if TYPE_CHECKING:
    from .url import URL

TQueryValue = Union[str, list[str]]
TQueryMapping = Union[
    Mapping[str, Union[str, Sequence[str]]],
    Iterable[tuple[str, str]],
]
TURLLike = Union[str, "URL", None]
TLocationProvider = Callable[[], Union[str, "URL"]]
