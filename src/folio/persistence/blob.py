# SPDX-License-Identifier: MIT

import re
from pathlib import Path
from typing import Optional, Protocol


class BlobStore(Protocol):
    def put(self, key: str, data: bytes) -> None: ...

    def get(self, key: str) -> Optional[bytes]: ...

    def delete(self, key: str) -> None: ...


class InMemoryBlobStore:
    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}

    def put(self, key: str, data: bytes) -> None:
        self.blobs[key] = bytes(data)

    def get(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)


class DirectoryBlobStore:
    """One file per blob, named after its key."""

    _VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")

    def __init__(self, path: Path) -> None:
        self.path = path

    def put(self, key: str, data: bytes) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        self.__blob_path(key).write_bytes(data)

    def get(self, key: str) -> Optional[bytes]:
        blob_path = self.__blob_path(key)
        if not blob_path.is_file():
            return None
        return blob_path.read_bytes()

    def delete(self, key: str) -> None:
        blob_path = self.__blob_path(key)
        if blob_path.exists():
            blob_path.unlink()

    def __blob_path(self, key: str) -> Path:
        if not self._VALID_KEY.match(key) or key in (".", ".."):
            raise ValueError(f"invalid blob key: '{key}'")
        return self.path / key
