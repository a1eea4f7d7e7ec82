"""Read-only HostStore over an ssh_config file."""

from __future__ import annotations

import logging
from pathlib import Path

from sshdeck.sshconfig import Lexer, Parser, Source
from sshdeck.store.base import NotFoundError, NotSupportedError
from sshdeck.types import Host, StorageKind


class SSHConfigFileStore:
    """Exposes ssh_config hosts as a store. The file is never written.

    Every ``list()`` parses the file again and numbers hosts 0..N-1 in the
    order they were found.
    """

    def __init__(self, source: Source | Path | str, logger: logging.Logger | None = None):
        if not isinstance(source, Source):
            source = Source.file(source)
        self.source = source
        self.logger = logger or logging.getLogger(__name__)
        self._hosts: list[Host] = []

    def kind(self) -> StorageKind:
        return StorageKind.SSH_CONFIG

    def list(self) -> list[Host]:
        self.logger.debug(f"[STORAGE] Read hosts from ssh config: {self.source}")
        parser = Parser(Lexer(self.source, logger=self.logger), logger=self.logger)
        hosts = parser.parse()

        for index, host in enumerate(hosts):
            host.id = index
            host.storage = self.kind()

        self._hosts = hosts
        return [host.model_copy() for host in hosts]

    def get(self, host_id: int) -> Host:
        if not 0 <= host_id < len(self._hosts):
            raise NotFoundError(host_id)
        return self._hosts[host_id].model_copy()

    def save(self, host: Host) -> Host:
        raise NotSupportedError("ssh_config hosts are read-only")

    def delete(self, host_id: int) -> None:
        raise NotSupportedError("ssh_config hosts are read-only")
