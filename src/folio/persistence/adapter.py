# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, Protocol

import yaml
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from folio.exception import PersistenceFailed

logger = logging.getLogger(__name__)


class PersistenceAdapter(Protocol):
    def load(self) -> Optional[dict[str, Any]]:
        """Return the stored document, or None when nothing has been saved yet."""
        ...

    def save(self, document: dict[str, Any]) -> None:
        """Write the document. Raises PersistenceFailed when the write fails."""
        ...


class InMemoryPersistenceAdapter:
    def __init__(
        self, document: Optional[dict[str, Any]] = None, fail_saves: bool = False
    ) -> None:
        self.document = deepcopy(document)
        self.fail_saves = fail_saves
        self.save_count = 0

    def load(self) -> Optional[dict[str, Any]]:
        return deepcopy(self.document)

    def save(self, document: dict[str, Any]) -> None:
        if self.fail_saves:
            raise PersistenceFailed("quota exceeded")
        self.document = deepcopy(document)
        self.save_count += 1


class YamlFilePersistenceAdapter:
    """
    Keeps the whole store document in a single YAML file.

    When a backup path is given, the previous content of the file is copied
    there before every write, and a main file that cannot be parsed is
    recovered from the backup on load.
    """

    def __init__(self, path: Path, backup_path: Optional[Path] = None) -> None:
        self.path = path
        self.backup_path = backup_path

    def load(self) -> Optional[dict[str, Any]]:
        if not self.path.is_file():
            return None

        try:
            return self.__read_document(self.path)
        except (OSError, yaml.YAMLError, ValueError) as error:
            logger.error("failed to load %s: %s", self.path, error)

        if self.backup_path is None or not self.backup_path.is_file():
            return None

        try:
            document = self.__read_document(self.backup_path)
        except (OSError, yaml.YAMLError, ValueError) as error:
            logger.error("backup %s is also unreadable: %s", self.backup_path, error)
            return None

        logger.warning("restored store document from backup %s", self.backup_path)
        return document

    def save(self, document: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.backup_path is not None and self.path.is_file():
                previous = self.path.read_text()
                if previous.strip():
                    self.backup_path.write_text(previous)
            self.path.write_text(dump(document, Dumper=Dumper))
        except (OSError, yaml.YAMLError) as error:
            raise PersistenceFailed(str(error), error) from error

    def __read_document(self, path: Path) -> Optional[dict[str, Any]]:
        document = load(path.read_text(), Loader=Loader)
        if document is None:
            return None
        if not isinstance(document, dict):
            raise ValueError(f"expected a mapping at the top of {path}")
        return document
