"""Resolve the connection settings ssh would use for a host."""

import getpass
import logging
from pathlib import Path

from paramiko.config import SSHConfig

from sshdeck.types import ConnectionDefaults, Host

logger = logging.getLogger(__name__)


def load_ssh_config(path: str | Path) -> SSHConfig:
    """Load an ssh_config file. A missing file gives an empty config."""
    path = Path(path).expanduser()
    if not path.is_file():
        logger.debug(f"[CONFIG] SSH config not found: {path}")
        return SSHConfig()
    return SSHConfig.from_path(str(path))


def current_username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "n/a"


def resolve_connection_defaults(host: Host, ssh_config: SSHConfig) -> ConnectionDefaults:
    """Combine ssh_config lookups with the values set on the host itself.

    Values stored on the host win over ssh_config.
    """
    alias = host.address.strip() or host.title.strip()
    found = ssh_config.lookup(alias)

    identity_files = found.get("identityfile", [])
    return ConnectionDefaults(
        hostname=found.get("hostname", alias),
        port=host.remote_port or str(found.get("port", "22")),
        user=host.login_name or found.get("user") or current_username(),
        identity_file=host.identity_file_path or (identity_files[0] if identity_files else ""),
    )
