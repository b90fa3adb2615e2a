import re

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def pascal_case(name: str) -> str:
    """``created_at`` -> ``CreatedAt``; already-Pascal names pass through."""
    parts = [p for p in re.split(r"[_\-\s]+", name) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def snake_case(name: str) -> str:
    """``UserProfile`` -> ``user_profile``."""
    return _WORD_BOUNDARY.sub("_", name).replace("-", "_").lower()
