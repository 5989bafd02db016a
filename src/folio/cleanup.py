# SPDX-License-Identifier: MIT

import atexit
import logging

from folio.exception import PersistenceFailed
from folio.repository.configuration import CONFIGURATION_REPO
from folio.repository.store import EntityStore

logger = logging.getLogger(__name__)


def flush_and_sync(store: EntityStore) -> None:
    CONFIGURATION_REPO.flush()

    # Retry a save that failed earlier in the session
    try:
        store.flush()
    except PersistenceFailed:
        logger.error("unsaved changes were lost on exit")


def register_cleanup(store: EntityStore) -> None:
    atexit.register(flush_and_sync, store)
