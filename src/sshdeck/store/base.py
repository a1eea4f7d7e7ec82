"""HostStore protocol and storage errors."""

from __future__ import annotations

from typing import Protocol

from sshdeck.types import Host, StorageKind


class StoreError(Exception):
    """Base class for storage errors."""


class NotFoundError(StoreError, LookupError):
    """No host with the given ID."""

    def __init__(self, host_id: int):
        super().__init__(f"Host with id {host_id} not found")
        self.host_id = host_id


class NotSupportedError(StoreError):
    """The backend does not support this operation."""


class CorruptFileError(StoreError, ValueError):
    """The backing file could not be loaded, so it must not be rewritten."""


class HostStore(Protocol):
    """Protocol for host storage."""

    def list(self) -> list[Host]:
        """Read all hosts. IDs are valid until the next call."""
        ...

    def get(self, host_id: int) -> Host:
        """Get host by ID. Raises NotFoundError."""
        ...

    def save(self, host: Host) -> Host:
        """Create or update a host. Returns the stored host with its ID."""
        ...

    def delete(self, host_id: int) -> None:
        """Delete host by ID."""
        ...

    def kind(self) -> StorageKind:
        """Backend tag."""
        ...
