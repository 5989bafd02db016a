# SPDX-License-Identifier: MIT

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from folio.model.entity_id import EntityId
from folio.repository.store import EntityStore
from folio.view.header import header
from folio.view.util import short_id


def container_label(store: EntityStore, container_id: EntityId, name: str) -> str:
    count = len(store.get_items_of(container_id))
    style = "bold cyan" if store.is_system_container(container_id) else "cyan"
    return (
        f"[{style}]{escape(name)}[/{style}] "
        f"[grey50]{short_id(container_id)} ({count})[/grey50]"
    )


def build_container_tree(
    store: EntityStore, root_id: Optional[EntityId] = None, show_items: bool = False
) -> Tree:
    tree = Tree("[dark_orange]containers[/dark_orange]", guide_style="grey50")
    visited: set[EntityId] = set()

    def add_items(node: Tree, container_id: EntityId) -> None:
        if not show_items:
            return
        for item in store.get_items_of(container_id):
            node.add(f"{escape(item['title'])} [grey50]{short_id(item['id'])}[/grey50]")

    def add_children(branch: Tree, parent_id: Optional[EntityId]) -> None:
        for child in store.get_children(parent_id):
            if child["id"] in visited:
                continue
            visited.add(child["id"])
            node = branch.add(container_label(store, child["id"], child["name"]))
            add_items(node, child["id"])
            add_children(node, child["id"])

    if root_id is None:
        add_children(tree, None)
    else:
        container = store.get_container(root_id)
        if container is not None:
            visited.add(root_id)
            node = tree.add(container_label(store, root_id, container["name"]))
            add_items(node, root_id)
            add_children(node, root_id)
    return tree


def container_tree_report(
    store: EntityStore, root_id: Optional[EntityId] = None, show_items: bool = False
) -> None:
    header("containers")
    Console().print(build_container_tree(store, root_id, show_items))
