"""Combines several host stores under one ID space."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sshdeck.store.base import HostStore, NotFoundError
from sshdeck.store.ids import IDAllocator
from sshdeck.types import ID_EMPTY, Host, StorageKind


@dataclass(frozen=True)
class _Mapping:
    """Where a virtual ID points to."""

    kind: StorageKind
    native_id: int


class CombinedStore:
    """Routes host operations to the backend that owns each host.

    Backends number their hosts independently, so hosts are handed out with
    virtual IDs instead. The virtual ID table is rebuilt on every ``list()``;
    IDs from an older listing must not be reused after that.

    New hosts always go to the ``writable`` backend.
    """

    def __init__(
        self,
        stores: list[HostStore],
        writable: StorageKind = StorageKind.YAML_FILE,
        logger: logging.Logger | None = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self._stores: dict[StorageKind, HostStore] = {}
        for store in stores:
            store_kind = store.kind()
            if store_kind == StorageKind.COMBINED:
                raise ValueError(f"Cannot nest {store_kind.value} storage")
            if store_kind in self._stores:
                raise ValueError(f"Duplicate storage type: {store_kind.value}")
            self._stores[store_kind] = store

        if writable not in self._stores:
            raise ValueError(f"Writable storage {writable.value} is not configured")
        self.writable = writable

        self._mapping: dict[int, _Mapping] = {}
        self._ids = IDAllocator(start=ID_EMPTY)

    def kind(self) -> StorageKind:
        return StorageKind.COMBINED

    def list(self) -> list[Host]:
        """List hosts from all backends.

        A backend that fails is logged and left out. If every backend fails,
        the first error is raised.
        """
        mapping: dict[int, _Mapping] = {}
        ids = IDAllocator(start=ID_EMPTY)
        hosts: list[Host] = []
        errors: list[Exception] = []

        for store_kind, store in self._stores.items():
            try:
                store_hosts = store.list()
            except Exception as e:
                self.logger.error(f"[STORAGE] Cannot read hosts from {store_kind.value} storage: {e}")
                errors.append(e)
                continue

            for host in store_hosts:
                virtual_id = ids.next()
                mapping[virtual_id] = _Mapping(kind=store_kind, native_id=host.id)
                self.logger.debug(
                    f"[STORAGE] Storage type: {store_kind.value} -> host id: {host.id} -> {virtual_id}"
                )
                hosts.append(host.model_copy(update={"id": virtual_id, "storage": store_kind}))

        if errors and len(errors) == len(self._stores):
            raise errors[0]

        self._mapping = mapping
        self._ids = ids
        return hosts

    def get(self, host_id: int) -> Host:
        target = self._resolve(host_id)
        host = self._stores[target.kind].get(target.native_id)
        return host.model_copy(update={"id": host_id, "storage": target.kind})

    def save(self, host: Host) -> Host:
        target = self._mapping.get(host.id)
        if target is not None:
            virtual_id = host.id
            saved = self._stores[target.kind].save(host.model_copy(update={"id": target.native_id}))
            self._mapping[virtual_id] = _Mapping(kind=target.kind, native_id=saved.id)
            return saved.model_copy(update={"id": virtual_id, "storage": target.kind})

        saved = self._stores[self.writable].save(
            host.model_copy(update={"id": ID_EMPTY, "storage": self.writable})
        )
        virtual_id = self._ids.next()
        self._mapping[virtual_id] = _Mapping(kind=self.writable, native_id=saved.id)
        self.logger.debug(f"[STORAGE] New host {saved.id} in {self.writable.value} -> {virtual_id}")
        return saved.model_copy(update={"id": virtual_id, "storage": self.writable})

    def delete(self, host_id: int) -> None:
        target = self._resolve(host_id)
        self._stores[target.kind].delete(target.native_id)
        del self._mapping[host_id]

    def _resolve(self, host_id: int) -> _Mapping:
        target = self._mapping.get(host_id)
        if target is None:
            self.logger.debug(f"[STORAGE] Host id {host_id} is not mapped to any storage")
            raise NotFoundError(host_id)
        return target
