"""Mapping from URLs to storage keys."""
import re
from collections import defaultdict

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def url_to_key(url: str) -> str:
    """Turn a URL into a filesystem-safe storage key.

    The scheme is stripped and every non-alphanumeric character becomes "-",
    so ``https://example.com/`` maps to ``example-com-``. The mapping is lossy
    (``a.b`` and ``a-b`` share a key); use find_key_collisions() on the
    configured URL set to reject such pairs up front.
    """
    return _NON_ALNUM_RE.sub("-", _SCHEME_RE.sub("", url, count=1))


def find_key_collisions(urls: list[str]) -> dict[str, list[str]]:
    """Return keys shared by more than one distinct URL."""
    groups: dict[str, list[str]] = defaultdict(list)
    for url in urls:
        group = groups[url_to_key(url)]
        if url not in group:
            group.append(url)
    return {key: group for key, group in groups.items() if len(group) > 1}
