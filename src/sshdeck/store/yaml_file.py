"""YAML file implementation of HostStore."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from sshdeck.store.base import CorruptFileError, NotFoundError
from sshdeck.store.ids import IDAllocator
from sshdeck.types import ID_EMPTY, Host, StorageKind

HOSTS_FILE = "hosts.yaml"


class YAMLFileStore:
    """Writable host store backed by a YAML file.

    The file holds a list of ``{"host": {...}}`` records. IDs are not stored;
    every ``list()`` numbers the records 1..N in file order. After a failed
    ``list()`` the store refuses to write until a later ``list()`` succeeds.
    """

    def __init__(self, path: Path, logger: logging.Logger | None = None):
        self.path = Path(path)
        self.logger = logger or logging.getLogger(__name__)
        self._hosts: dict[int, Host] = {}
        self._ids = IDAllocator(start=ID_EMPTY)
        self._load_failed = False

    def kind(self) -> StorageKind:
        return StorageKind.YAML_FILE

    def list(self) -> list[Host]:
        self._hosts = {}
        self._ids.reset()
        self._load_failed = True

        self.logger.debug(f"[STORAGE] Read hosts from file: {self.path}")
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.logger.info(f"[STORAGE] Path not found: {self.path}. Assuming it's not created yet")
            self._load_failed = False
            return []

        for record in self._load_records(content):
            host = Host.from_yaml_dict(record["host"])
            host.id = self._ids.next()
            host.storage = self.kind()
            self._hosts[host.id] = host

        self._load_failed = False
        self.logger.debug(f"[STORAGE] Read {len(self._hosts)} items from the database")
        return [host.model_copy() for host in self._hosts.values()]

    def get(self, host_id: int) -> Host:
        host = self._hosts.get(host_id)
        if host is None:
            self.logger.debug(f"[STORAGE] Host id {host_id} NOT found in the database")
            raise NotFoundError(host_id)
        return host.model_copy()

    def save(self, host: Host) -> Host:
        self._check_writable()
        host = host.model_copy(update={"storage": self.kind()})
        if host.id == ID_EMPTY:
            host.id = self._ids.next()
            self.logger.debug(f"[STORAGE] Generate new id {host.id} for new host with title: {host.title}")
        else:
            self._ids.advance_past(host.id)

        self.logger.info(f"[STORAGE] Save host with id: {host.id}, title: {host.title}")
        self._hosts[host.id] = host
        self._flush()
        return host.model_copy()

    def delete(self, host_id: int) -> None:
        self._check_writable()
        if host_id not in self._hosts:
            raise NotFoundError(host_id)

        self.logger.info(f"[STORAGE] Delete host with id: {host_id}")
        del self._hosts[host_id]
        self._flush()

    def _check_writable(self) -> None:
        if self._load_failed:
            self.logger.error(f"[STORAGE] Refuse to rewrite {self.path}: last read failed")
            raise CorruptFileError(f"{self.path} could not be read; fix it before making changes")

    def _load_records(self, content: str) -> list[dict]:
        # BaseLoader keeps every scalar a string: `yes` stays "yes", 22 stays "22".
        try:
            data = yaml.load(content, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            self.logger.error(f"[STORAGE] Could not unmarshal hosts data. {e}")
            raise

        if data is None:
            return []
        if not isinstance(data, list):
            raise CorruptFileError(f"{self.path}: expected a list of hosts, got {type(data).__name__}")

        for index, record in enumerate(data):
            if not isinstance(record, dict) or not isinstance(record.get("host"), dict):
                self.logger.error(f"[STORAGE] Malformed record in {self.path}: {record!r}")
                raise CorruptFileError(f"{self.path}: record {index + 1} is not a host mapping")
        return data

    def _flush(self) -> None:
        """Rewrite the whole file from the in-memory map."""
        records = [
            {"host": self._hosts[host_id].to_yaml_dict()}
            for host_id in sorted(self._hosts)
        ]

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(records, f, sort_keys=False, allow_unicode=True)
        except OSError as e:
            self.logger.error(f"[STORAGE] Cannot flush database changes to disk. {e}")
            raise
