from __future__ import annotations


def normalize_path(path: str) -> str:
    """Collapse ``..`` segments of the given path.

    Paths without ``..`` segments are returned unchanged. Extra ``..`` segments which
    would climb above the root are dropped silently, so ``../a`` becomes ``a``. This is
    tolerated rather than reported as an invalid path.
    """
    segments = path.split("/")
    if ".." not in segments:
        return path

    stack: list[str] = []
    for segment in segments:
        if segment == "..":
            if stack:
                stack.pop()

        elif segment and segment != ".":
            stack.append(segment)

    normalized = "/".join(stack)

    if path.startswith("/"):
        normalized = f"/{normalized}"

    # keep the trailing slash, but never turn the root into "//"
    if path.endswith("/") and len(normalized) > 1:
        normalized += "/"

    return normalized
