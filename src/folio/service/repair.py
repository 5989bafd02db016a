# SPDX-License-Identifier: MIT

import logging
from typing import Iterable, Optional

from folio.exception import PersistenceFailed
from folio.model.container import Container
from folio.model.entity_id import EntityId
from folio.persistence.adapter import PersistenceAdapter
from folio.persistence.blob import BlobStore
from folio.repository.store import EntityStore

logger = logging.getLogger(__name__)


def repair_containers(
    containers: list[Container],
    system_container_ids: Iterable[EntityId],
    implicit_root_ids: Iterable[EntityId] = (),
) -> list[EntityId]:
    """
    Normalize corrupted parent references in place.

    Applied to each container in store order:

    - a system container always sits at the top level
    - a container that is its own parent becomes top-level
    - a parent naming an implicit root (a legacy id that is never stored as
      a parent) becomes top-level
    - a parent that does not resolve to an existing container becomes
      top-level, so the container is kept rather than dropped
    - the first container found on a parent cycle becomes top-level

    Items and trash are never touched. Running the pass twice changes
    nothing the second time.

    Returns:
        Ids of the containers that were changed, in store order
    """
    system_ids = set(system_container_ids)
    implicit_roots = set(implicit_root_ids)
    existing_ids = {container["id"] for container in containers}

    repaired: list[EntityId] = []
    for container in containers:
        parent_id = container["parent_id"]
        if parent_id is None:
            continue

        if container["id"] in system_ids:
            logger.info("repairing nested system container: %s", container["name"])
        elif parent_id == container["id"]:
            logger.info("repairing self-referencing container: %s", container["name"])
        elif parent_id in implicit_roots:
            logger.debug("normalizing implicit root parent of: %s", container["name"])
        elif parent_id not in existing_ids:
            logger.info("repairing orphaned container: %s", container["name"])
        else:
            continue

        container["parent_id"] = None
        repaired.append(container["id"])

    parents = {container["id"]: container["parent_id"] for container in containers}
    for container in containers:
        if __is_on_cycle(container["id"], parents):
            logger.info("repairing cyclic container: %s", container["name"])
            container["parent_id"] = None
            parents[container["id"]] = None
            repaired.append(container["id"])

    return repaired


def __is_on_cycle(
    container_id: EntityId, parents: dict[EntityId, Optional[EntityId]]
) -> bool:
    seen: set[EntityId] = set()
    current = parents.get(container_id)
    while current is not None and current not in seen:
        if current == container_id:
            return True
        seen.add(current)
        current = parents.get(current)
    return False


def open_store(
    adapter: PersistenceAdapter,
    blob_store: Optional[BlobStore] = None,
    **options: object,
) -> EntityStore:
    """
    Load a store from the adapter and repair it before first use.

    The repaired state is always written back. A failed write is logged and
    does not prevent the store from being used.
    """
    store = EntityStore(adapter, blob_store, **options)  # type: ignore[arg-type]
    store.load()

    repaired = repair_containers(
        store.containers, store.system_container_ids, store.implicit_root_ids
    )
    if repaired:
        logger.info("repaired %d container parent reference(s)", len(repaired))

    store.is_dirty = True
    try:
        store.flush()
    except PersistenceFailed:
        logger.warning("continuing with an unsaved store after repair")
    return store
