"""Reduce arbitrary language tags to a supported base locale code."""

from __future__ import annotations

import re

from .catalog import LocaleCatalog, get_catalog

_SUBTAG_SEPARATOR = re.compile(r"[-_]")


def normalise_locale(tag: object, catalog: LocaleCatalog | None = None) -> str | None:
    """Return the supported base code for ``tag`` or ``None``.

    ``"ja-JP"``, ``"JA"`` and ``"ja_JP"`` all collapse to ``"ja"``. Unknown,
    empty and non-string values yield ``None`` rather than an error so callers
    can fall through to their next candidate.
    """

    if not isinstance(tag, str):
        return None

    stripped = tag.strip()
    if not stripped:
        return None

    primary = _SUBTAG_SEPARATOR.split(stripped, maxsplit=1)[0].lower()
    catalog = catalog or get_catalog()
    return primary if catalog.is_supported_locale(primary) else None


__all__ = ["normalise_locale"]
