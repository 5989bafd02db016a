# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from folio import configuration
from folio.persistence.adapter import YamlFilePersistenceAdapter
from folio.persistence.blob import DirectoryBlobStore
from folio.repository.configuration import CONFIGURATION_REPO
from folio.repository.store import EntityStore
from folio.service.repair import open_store
from folio.view import state as view_state


def initialize() -> configuration.Configuration:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_file()
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    config = CONFIGURATION_REPO.get_config()
    view_state.set_show_header(config["show_header"])
    return config


def open_default_store(config: configuration.Configuration) -> EntityStore:
    adapter = YamlFilePersistenceAdapter(
        configuration.DATA_STORE_PATH,
        configuration.DATA_STORE_BACKUP_PATH if config["backup_on_save"] else None,
    )
    return open_store(
        adapter,
        DirectoryBlobStore(configuration.DATA_BLOBS_PATH),
        implicit_root_ids=config["implicit_root_ids"],
    )


def __ensure_config_file() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))
