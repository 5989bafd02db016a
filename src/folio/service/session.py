# SPDX-License-Identifier: MIT

import logging

from folio.exception import NotFound
from folio.model.entity_id import EntityId
from folio.model.session import PaneState
from folio.repository.store import EntityStore

logger = logging.getLogger(__name__)


def select_item(store: EntityStore, id: EntityId) -> None:
    """Open an item in a tab, if it is not open already, and make it active."""
    store.find_item(id)

    session = store.session
    if id not in session["open_ids"]:
        session["open_ids"].append(id)
    session["active_id"] = id
    store.commit()


def close_tab(store: EntityStore, id: EntityId) -> None:
    """
    Close an item's tab.

    Closing the active tab activates the tab that now sits at the closed
    tab's position, or the last tab when the closed one was last. Closing
    the only tab leaves no active item.
    """
    if id not in store.session["open_ids"]:
        return
    forget_item(store, id)
    store.commit()


def switch_tab(store: EntityStore, id: EntityId) -> None:
    """
    Make an open tab active. A tab whose item has been deleted in the
    meantime is closed instead.
    """
    session = store.session
    if id not in session["open_ids"]:
        raise NotFound(id, "open tab")

    if not store.item_exists(id):
        logger.debug("closing tab of missing item %s", id)
        close_tab(store, id)
        return

    session["active_id"] = id
    store.commit()


def forget_item(store: EntityStore, id: EntityId) -> None:
    """Drop an item from the session without saving."""
    session = store.session
    if id not in session["open_ids"]:
        return

    index = session["open_ids"].index(id)
    session["open_ids"].remove(id)

    if session["active_id"] == id:
        open_ids = session["open_ids"]
        session["active_id"] = open_ids[min(index, len(open_ids) - 1)] if open_ids else None


def pane_state(store: EntityStore) -> str:
    return PaneState.EMPTY if store.session["active_id"] is None else PaneState.VIEWING
