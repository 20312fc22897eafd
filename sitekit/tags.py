from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .content import ContentItem


def collect_tags(items: Iterable[ContentItem]) -> list[str]:
    tag_set = set()
    for item in items:
        tag_set.update(item.get_list("tags"))
    return sorted(tag_set)


def group_by(items: Iterable[ContentItem], key: str) -> list[tuple[str, list[ContentItem]]]:
    """Group items under every value of ``key``.

    Groups keep the order in which each value was first seen, and an item
    carrying several values is listed under each of them.
    """
    groups: dict[str, list[ContentItem]] = {}
    for item in items:
        for tag in item.get_list(key):
            groups.setdefault(tag, []).append(item)
    return list(groups.items())
