# SPDX-License-Identifier: MIT

import html
import re
from typing import Optional

from folio.model.entity_id import EntityId
from folio.model.item import Item
from folio.repository.store import EntityStore, blob_key

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_html(text: str) -> str:
    return html.unescape(_TAG_PATTERN.sub(" ", text))


def item_text(item: Item) -> str:
    """Searchable text of an item: its title and its content without markup."""
    content = item["content"]
    if blob_key(content) is not None:
        content = ""
    return f"{item['title']} {strip_html(content)}"


def search_items(
    store: EntityStore, query: str, container_id: Optional[EntityId] = None
) -> list[Item]:
    """
    Case-insensitive substring search over item titles and content.

    When ``container_id`` is given only items in that container and its
    descendants are searched. An empty query matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    scope: Optional[set[EntityId]] = None
    if container_id is not None:
        scope = store.get_descendant_container_ids(container_id) | {container_id}

    return [
        item
        for item in store.get_items()
        if (scope is None or item["container_id"] in scope)
        and needle in item_text(item).lower()
    ]


def filter_by_tag(store: EntityStore, tag: str) -> list[Item]:
    return [item for item in store.get_items() if tag in item["tags"]]


def tag_counts(store: EntityStore) -> list[tuple[str, int]]:
    """Number of items per tag, sorted by tag name."""
    counts: dict[str, int] = {}
    for item in store.items:
        for tag in item["tags"]:
            counts[tag] = counts.get(tag, 0) + 1
    return sorted(counts.items())
