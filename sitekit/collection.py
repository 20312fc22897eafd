from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Sequence

from .tags import collect_tags

if TYPE_CHECKING:
    from .config import SiteConfig
    from .content import ContentItem

POSTS_GLOB = "_posts/*.md"


def matches_glob(input_path: str, pattern: str) -> bool:
    path = PurePosixPath(input_path)
    # PurePath.match anchors from the right, so compare part counts too.
    return len(path.parts) == len(PurePosixPath(pattern).parts) and path.match(pattern)


def posts(all_items: Sequence[ContentItem], glob: str = POSTS_GLOB) -> list[ContentItem]:
    selected = [item for item in all_items if matches_glob(item.input_path, glob)]
    selected.reverse()
    return selected


def tag_list(all_items: Sequence[ContentItem]) -> list[str]:
    return collect_tags(all_items)


COLLECTIONS = {
    "posts": lambda items, config: posts(items, config.posts_glob),
    "tagList": lambda items, config: tag_list(items),
}


def build_collections(items: Sequence[ContentItem], config: SiteConfig) -> dict[str, list]:
    return {name: build(items, config) for name, build in config.collections.items()}
