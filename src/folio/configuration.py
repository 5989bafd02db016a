# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "folio"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_STORE_PATH: Path = DATA_PATH / "store.yaml"
DATA_STORE_BACKUP_PATH: Path = DATA_PATH / "store.backup.yaml"
DATA_BLOBS_PATH: Path = DATA_PATH / "blobs"


class Configuration(TypedDict):
    data_path: Optional[str]
    backup_on_save: bool
    log_level: str
    show_header: bool
    implicit_root_ids: list[str]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "backup_on_save": True,
        "log_level": "WARNING",
        "show_header": True,
        "implicit_root_ids": [],
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the store
    is opened.
    """
    global DATA_PATH, DATA_STORE_PATH, DATA_STORE_BACKUP_PATH, DATA_BLOBS_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting).expanduser()

        DATA_STORE_PATH = DATA_PATH / "store.yaml"
        DATA_STORE_BACKUP_PATH = DATA_PATH / "store.backup.yaml"
        DATA_BLOBS_PATH = DATA_PATH / "blobs"
