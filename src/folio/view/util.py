# SPDX-License-Identifier: MIT

from typing import Iterable

from folio.model.entity_id import EntityId

SHORT_ID_LENGTH = 8


def short_id(id: EntityId) -> str:
    return id[:SHORT_ID_LENGTH]


def format_tags(tags: Iterable[str]) -> str:
    return " ".join(f"#{tag}" for tag in sorted(tags))

