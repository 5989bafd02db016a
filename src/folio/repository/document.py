# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, cast

from folio import time
from folio.model.container import Container
from folio.model.item import Item
from folio.model.session import Session
from folio.model.state import StoreState
from folio.model.trash import TrashEntry, TrashKind
from folio.template.session import get_session_template

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def serialize_state(state: StoreState) -> dict[str, Any]:
    """
    Render the in-memory state as a JSON-compatible document.

    Timestamps become ISO-8601 strings and tag sets become sorted lists.
    """
    state = deepcopy(state)
    return {
        "schema_version": SCHEMA_VERSION,
        "containers": [dict(container) for container in state["containers"]],
        "items": [__convert_item_for_serialization(item) for item in state["items"]],
        "trash": [
            __convert_trash_entry_for_serialization(entry) for entry in state["trash"]
        ],
        "session": dict(state["session"]),
        "favorites": list(state["favorites"]),
    }


def deserialize_document(document: dict[str, Any]) -> StoreState:
    document = deepcopy(document)

    schema_version = document.get("schema_version", 0)
    if schema_version > SCHEMA_VERSION:
        logger.warning(
            "document schema version %s is newer than supported version %s",
            schema_version,
            SCHEMA_VERSION,
        )

    raw_session = document.get("session") or {}
    session = get_session_template()
    session["open_ids"] = list(dict.fromkeys(raw_session.get("open_ids") or []))
    session["active_id"] = raw_session.get("active_id")

    return {
        "containers": [
            __convert_container_for_deserialization(container)
            for container in document.get("containers") or []
        ],
        "items": [
            __convert_item_for_deserialization(item)
            for item in document.get("items") or []
        ],
        "trash": [
            __convert_trash_entry_for_deserialization(entry)
            for entry in document.get("trash") or []
        ],
        "session": cast(Session, session),
        "favorites": list(dict.fromkeys(document.get("favorites") or [])),
    }


def __convert_item_for_serialization(item: Item) -> dict[str, Any]:
    serializable_item = cast(dict[str, Any], item)
    serializable_item["tags"] = sorted(serializable_item["tags"])
    serializable_item["created_at"] = time.datetime_to_iso_str(
        serializable_item["created_at"]
    )
    serializable_item["updated_at"] = time.datetime_to_iso_str(
        serializable_item["updated_at"]
    )
    return serializable_item


def __convert_trash_entry_for_serialization(entry: TrashEntry) -> dict[str, Any]:
    serializable_entry = cast(dict[str, Any], entry)
    if serializable_entry["kind"] == TrashKind.ITEM:
        serializable_entry["tags"] = sorted(serializable_entry["tags"])
    serializable_entry["deleted_at"] = time.datetime_to_iso_str(
        serializable_entry["deleted_at"]
    )
    return serializable_entry


def __convert_container_for_deserialization(container: dict[str, Any]) -> Container:
    return {
        "id": container["id"],
        "name": container.get("name") or "",
        "parent_id": container.get("parent_id"),
    }


def __convert_item_for_deserialization(item: dict[str, Any]) -> Item:
    deserializable_item = item
    deserializable_item["tags"] = set(deserializable_item.get("tags") or [])
    deserializable_item.setdefault("title", "")
    deserializable_item.setdefault("content", "")

    now = time.now_utc()
    created_at = deserializable_item.get("created_at")
    updated_at = deserializable_item.get("updated_at")
    deserializable_item["created_at"] = (
        time.datetime_from_str(created_at) if created_at is not None else now
    )
    deserializable_item["updated_at"] = (
        time.datetime_from_str(updated_at) if updated_at is not None else now
    )
    return cast(Item, deserializable_item)


def __convert_trash_entry_for_deserialization(entry: dict[str, Any]) -> TrashEntry:
    deserializable_entry = entry
    if deserializable_entry["kind"] == TrashKind.ITEM:
        deserializable_entry["tags"] = set(deserializable_entry.get("tags") or [])
        deserializable_entry.setdefault("content", "")
    deleted_at = deserializable_entry.get("deleted_at")
    deserializable_entry["deleted_at"] = (
        time.datetime_from_str(deleted_at) if deleted_at is not None else time.now_utc()
    )
    return cast(TrashEntry, deserializable_entry)
