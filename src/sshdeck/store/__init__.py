"""Host storage backends."""

import logging

from sshdeck.config import AppConfig
from sshdeck.store.base import CorruptFileError, HostStore, NotFoundError, NotSupportedError, StoreError
from sshdeck.store.combined import CombinedStore
from sshdeck.store.sshconfig_file import SSHConfigFileStore
from sshdeck.store.yaml_file import YAMLFileStore
from sshdeck.types import StorageKind


def build_store(config: AppConfig, logger: logging.Logger | None = None) -> CombinedStore:
    """Wire up the configured backends. New hosts go to the YAML file."""
    logger = logger or logging.getLogger(__name__)
    logger.debug(f"[STORAGE] Init YAML storage. Config folder {config.app_home}")
    stores: list[HostStore] = [YAMLFileStore(config.hosts_path, logger=logger)]

    if config.ssh_config_enabled:
        logger.debug(f"[STORAGE] Init ssh_config storage: {config.ssh_config_file_path}")
        stores.append(SSHConfigFileStore(config.ssh_config_file_path, logger=logger))

    return CombinedStore(stores, writable=StorageKind.YAML_FILE, logger=logger)


__all__ = [
    "CombinedStore",
    "CorruptFileError",
    "HostStore",
    "NotFoundError",
    "NotSupportedError",
    "SSHConfigFileStore",
    "StoreError",
    "YAMLFileStore",
    "build_store",
]
