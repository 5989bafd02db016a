# SPDX-License-Identifier: MIT

from typing import Any, Optional

from folio.model.entity_id import EntityId


class FolioError(Exception):
    """Base class for every error raised by the content store."""

    pass


class InvalidParent(FolioError):
    """Raised when a container would be placed under an unknown parent."""

    def __init__(self, parent_id: EntityId) -> None:
        super().__init__(f"parent container '{parent_id}' does not exist")
        self.parent_id = parent_id


class InvalidContainer(FolioError):
    """Raised when an item would be placed in an unknown container."""

    def __init__(self, container_id: EntityId) -> None:
        super().__init__(f"container '{container_id}' does not exist")
        self.container_id = container_id


class NotFound(FolioError):
    def __init__(self, entity_id: EntityId, what: str = "entity") -> None:
        super().__init__(f"{what} '{entity_id}' not found")
        self.entity_id = entity_id
        self.what = what


class SystemContainerImmutable(FolioError):
    """Raised on any attempt to rename, move or delete a system container."""

    def __init__(self, container_id: EntityId) -> None:
        super().__init__(f"'{container_id}' is a system container and cannot be changed")
        self.container_id = container_id


class CycleDetected(FolioError):
    """Raised when a move would make a container its own ancestor."""

    def __init__(self, container_id: EntityId, new_parent_id: EntityId) -> None:
        super().__init__(
            f"cannot move container '{container_id}' into '{new_parent_id}': "
            "the target is the container itself or one of its descendants"
        )
        self.container_id = container_id
        self.new_parent_id = new_parent_id


class PersistenceFailed(FolioError):
    """
    Raised when the persistence adapter could not write the document.

    The in-memory change that triggered the write has already been applied
    and is not rolled back. ``result`` carries what the operation would have
    returned, such as the id of a newly created entity.
    """

    def __init__(self, reason: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"saving the store failed: {reason}")
        self.reason = reason
        self.cause = cause
        self.result: Any = None
