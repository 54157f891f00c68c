"""Tag domain logic: normalization and grouping."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from folio.domain.content import Document


def normalize_tags(value: Any) -> list[str]:
    """Normalize a front-matter tag value into a list of unique tags.

    Accepts a list or a comma/space separated string. Order is preserved.

    Examples:
        >>> normalize_tags("python, seo jekyll")
        ['python', 'seo', 'jekyll']
        >>> normalize_tags(["css", "css", " tailwind "])
        ['css', 'tailwind']
    """
    if value is None:
        return []
    if isinstance(value, str):
        raw: Iterable[Any] = re.split(r"[,\s]+", value)
    elif isinstance(value, Iterable):
        raw = value
    else:
        raw = [value]

    tags: list[str] = []
    for item in raw:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def group_by_tag(documents: Iterable[Document]) -> dict[str, list[Document]]:
    """Map each tag to the documents carrying it, keeping input order."""
    groups: dict[str, list[Document]] = {}
    for doc in documents:
        for tag in doc.tags:
            groups.setdefault(tag, []).append(doc)
    return dict(sorted(groups.items()))
