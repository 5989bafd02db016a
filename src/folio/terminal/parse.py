# SPDX-License-Identifier: MIT

import os
import subprocess
import tempfile
from typing import Iterable, Optional

import typer

from folio.model.entity_id import EntityId
from folio.repository.store import EntityStore


def resolve_id(value: str, candidates: Iterable[EntityId], what: str) -> EntityId:
    """
    Resolve a full id or a unique id prefix against the known ids.

    Raises:
        typer.BadParameter: If nothing or more than one id matches
    """
    candidates = list(candidates)
    if value in candidates:
        return value

    matches = [candidate for candidate in candidates if candidate.startswith(value)]
    if len(matches) == 0:
        raise typer.BadParameter(f"no {what} matches '{value}'")
    if len(matches) > 1:
        raise typer.BadParameter(
            f"'{value}' is ambiguous, it matches {len(matches)} {what}s"
        )
    return matches[0]


def resolve_container_id(store: EntityStore, value: str) -> EntityId:
    return resolve_id(value, (c["id"] for c in store.containers), "container")


def resolve_optional_container_id(
    store: EntityStore, value: Optional[str]
) -> Optional[EntityId]:
    if value is None:
        return None
    return resolve_container_id(store, value)


def resolve_item_id(store: EntityStore, value: str) -> EntityId:
    return resolve_id(value, (item["id"] for item in store.items), "item")


def resolve_trash_id(store: EntityStore, value: str) -> EntityId:
    return resolve_id(value, (entry["id"] for entry in store.trash), "trash entry")


def resolve_entity_id(store: EntityStore, value: str) -> EntityId:
    candidates = [c["id"] for c in store.containers] + [i["id"] for i in store.items]
    return resolve_id(value, candidates, "container or item")


def open_editor_for_text(initial_text: Optional[str] = None) -> Optional[str]:
    """
    Open the user's preferred editor to edit item content.
    Returns the edited text with trailing newlines removed, or None if empty.
    """
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".txt") as tf:
        if initial_text is not None:
            tf.write(initial_text)
            tf.flush()

        subprocess.run([editor, tf.name], check=True)
        tf.seek(0)
        text = tf.read()
        if not text.strip():
            return None
        # Remove trailing newlines but preserve internal empty lines
        return text.rstrip("\n")
