"""Build in-page anchor identifiers for endpoints and resources."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-{2,}")


class AnchorBuilder:
    """Turns display text into anchors, preserving non-ASCII characters.

    Whitespace runs become single hyphens, repeated hyphens collapse and
    leading/trailing hyphens are stripped. Letters, digits, punctuation and
    emoji are kept exactly as written. When *url_encode* is ``False`` the
    anchor is also lowercased.

    Anchors are memoized per (text, *url_encode*) pair, so building the same
    anchor repeatedly in one mode always yields the identical string.
    """

    def __init__(self, url_encode: bool = True) -> None:
        self.url_encode = url_encode
        self._cache: dict[tuple[str, bool], str] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def build(self, text: str) -> str:
        key = (text, self.url_encode)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        anchor = text if self.url_encode else text.lower()
        anchor = _WHITESPACE.sub("-", anchor)
        anchor = _HYPHEN_RUNS.sub("-", anchor).strip("-")

        self._cache[key] = anchor
        return anchor

    def for_operation(self, method: str, path: str, summary: str = "") -> str:
        """Anchor for an operation: its summary, else ``"METHOD path"``."""
        return self.build(summary or f"{method.upper()} {path}")

    def clear_cache(self) -> None:
        self._cache.clear()
