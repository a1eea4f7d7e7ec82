"""Core type definitions for sshdeck."""

from enum import Enum

from pydantic import BaseModel

# Hosts with this ID have not been stored yet.
ID_EMPTY = 0


class StorageKind(str, Enum):
    """Backends a host record can originate from."""

    YAML_FILE = "yaml_file"
    SSH_CONFIG = "ssh_config"
    COMBINED = "combined"


# Persisted key for each Host field, in file order.
_YAML_FIELDS = {
    "title": "title",
    "description": "description",
    "group": "group",
    "address": "address",
    "remote_port": "network_port",
    "login_name": "username",
    "identity_file_path": "identity_file_path",
}

# Keys written even when empty.
_YAML_REQUIRED = {"title", "address"}


class Host(BaseModel):
    """A named SSH destination."""

    id: int = ID_EMPTY
    title: str = ""
    description: str = ""
    group: str = ""
    address: str = ""
    remote_port: str = ""
    login_name: str = ""
    identity_file_path: str = ""
    storage: StorageKind | None = None

    def clone(self) -> "Host":
        """Copy of the host which is not bound to any record."""
        return self.model_copy(update={"id": ID_EMPTY, "storage": None})

    def to_yaml_dict(self) -> dict:
        data = {}
        for field, key in _YAML_FIELDS.items():
            value = getattr(self, field)
            if value or key in _YAML_REQUIRED:
                data[key] = value
        return data

    @classmethod
    def from_yaml_dict(cls, data: dict | None) -> "Host":
        data = data or {}
        values = {}
        for field, key in _YAML_FIELDS.items():
            value = data.get(key)
            if value is not None:
                values[field] = str(value)
        return cls(**values)


class ConnectionDefaults(BaseModel):
    """Effective connection settings for a host, as ssh would apply them."""

    hostname: str
    port: str = "22"
    user: str = ""
    identity_file: str = ""
