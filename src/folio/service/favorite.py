# SPDX-License-Identifier: MIT

from folio.exception import NotFound
from folio.model.container import Container
from folio.model.entity_id import EntityId
from folio.repository.store import EntityStore
from folio.service.reorder import reorder_within


def add_favorite(store: EntityStore, container_id: EntityId) -> bool:
    """Returns False when the container already is a favorite."""
    store.find_container(container_id)
    if container_id in store.favorites:
        return False

    store.favorites.append(container_id)
    store.commit(True)
    return True


def remove_favorite(store: EntityStore, container_id: EntityId) -> bool:
    if container_id not in store.favorites:
        return False

    store.favorites.remove(container_id)
    store.commit(True)
    return True


def reorder_favorite(
    store: EntityStore, dragged_id: EntityId, target_id: EntityId, insert_before: bool
) -> None:
    for id in (dragged_id, target_id):
        if id not in store.favorites:
            raise NotFound(id, "favorite")

    store.favorites = reorder_within(
        store.favorites, dragged_id, target_id, insert_before
    )
    store.commit()


def get_favorite_containers(store: EntityStore) -> list[Container]:
    favorites = []
    for id in store.favorites:
        container = store.get_container(id)
        if container is not None:
            favorites.append(container)
    return favorites
