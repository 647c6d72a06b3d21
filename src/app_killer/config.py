"""
Centralized configuration for app-killer.

Configuration sources (priority order):
1. Environment variables (APP_KILLER_*)
2. Default values

Environment variables:
- APP_KILLER_LOG_LEVEL: Log level (default: INFO)
- APP_KILLER_RUNTIME_DIR: Runtime directory (default: ~/.local/share/app-killer)
- APP_KILLER_SAVE_TIMEOUT: Seconds to wait for the save-state reply (default: 5)
- APP_KILLER_SCRIPT_TIMEOUT: Seconds a script may run, 0 = unbounded (default: 0)
- APP_KILLER_SERVICE_NAME: Well-known bus name (default: com.nokia.osso_app_killer)
- APP_KILLER_LOCALE_SCRIPT / _RESTORE_SCRIPT / _RFS_SCRIPT: Script paths
"""

import os
from dataclasses import dataclass
from pathlib import Path

from .model import Endpoint, ErrorKind, ScriptId

__all__ = ["KillerConfig", "config", "session_bus_address", "DEFAULT_RUNTIME_DIR"]

DEFAULT_RUNTIME_DIR = Path.home() / ".local/share/app-killer"

SESSION_BUS_ENV = "DBUS_SESSION_BUS_ADDRESS"


def _get_env(key: str, default: str) -> str:
    """Get environment variable with APP_KILLER_ prefix."""
    return os.environ.get(f"APP_KILLER_{key}", default)


def _get_env_float(key: str, default: float) -> float:
    """Get float environment variable."""
    return float(_get_env(key, str(default)))


def _get_env_path(key: str, default: Path) -> Path:
    """Get path environment variable."""
    val = os.environ.get(f"APP_KILLER_{key}")
    return Path(val) if val else default


def session_bus_address() -> str | None:
    """Session bus address from the environment, read at call time."""
    return os.environ.get(SESSION_BUS_ENV) or None


@dataclass(frozen=True)
class KillerConfig:
    """Immutable coordinator configuration."""

    log_level: str = _get_env("LOG_LEVEL", "INFO")
    runtime_dir: Path = _get_env_path("RUNTIME_DIR", DEFAULT_RUNTIME_DIR)

    # Own identity on the session bus
    service_name: str = _get_env("SERVICE_NAME", "com.nokia.osso_app_killer")
    locale_path: str = "/com/nokia/osso_app_killer/locale"
    restore_path: str = "/com/nokia/osso_app_killer/restore"
    rfs_shutdown_path: str = "/com/nokia/osso_app_killer/rfs_shutdown"
    request_interface: str = "com.nokia.osso_app_killer"

    # "Applications should exit" broadcast
    broadcast_path: str = "/com/nokia/osso_app_killer"
    broadcast_interface: str = "com.nokia.osso_app_killer"
    broadcast_member: str = "exit"

    # Window state saving call to the task navigator
    save_service: str = "com.nokia.tasknav"
    save_path: str = "/com/nokia/tasknav"
    save_interface: str = "com.nokia.tasknav"
    save_method: str = "save_session"
    save_timeout: float = _get_env_float("SAVE_TIMEOUT", 5.0)

    # Error names surfaced to callers
    locale_error: str = "com.nokia.osso_app_killer.locale.error"
    restore_error: str = "com.nokia.osso_app_killer.restore.error"
    rfs_shutdown_error: str = "com.nokia.osso_app_killer.rfs_shutdown.error"

    # External scripts
    locale_script: str = _get_env("LOCALE_SCRIPT", "/usr/sbin/osso-app-killer-locale.sh")
    restore_script: str = _get_env("RESTORE_SCRIPT", "/usr/sbin/osso-app-killer-restore.sh")
    rfs_script: str = _get_env("RFS_SCRIPT", "/usr/sbin/osso-app-killer-rfs.sh")
    script_timeout: float = _get_env_float("SCRIPT_TIMEOUT", 0.0)

    # Log rotation
    log_max_bytes: int = 5 * 1024 * 1024  # 5MB
    log_backup_count: int = 3

    def __post_init__(self) -> None:
        if self.save_timeout <= 0:
            raise ValueError(f"save_timeout must be greater than zero, got {self.save_timeout}")

    @property
    def log_dir(self) -> Path:
        """Log directory."""
        return self.runtime_dir / "logs"

    @property
    def log_file(self) -> Path:
        """Log file path."""
        return self.log_dir / "app-killer.log"

    @property
    def endpoint_paths(self) -> dict[Endpoint, str]:
        """Object path registered for each endpoint."""
        return {
            Endpoint.LOCALE_CHANGE: self.locale_path,
            Endpoint.RESTORE: self.restore_path,
            Endpoint.RFS_SHUTDOWN: self.rfs_shutdown_path,
        }

    @property
    def script_paths(self) -> dict[ScriptId, str]:
        """Executable invoked for each script identifier."""
        return {
            ScriptId.LOCALE: self.locale_script,
            ScriptId.RESTORE: self.restore_script,
            ScriptId.RFS: self.rfs_script,
        }

    @property
    def error_names(self) -> dict[ErrorKind, str]:
        """Bus error name attached to each error kind."""
        return {
            ErrorKind.LOCALE_ERROR: self.locale_error,
            ErrorKind.RESTORE_ERROR: self.restore_error,
            ErrorKind.RFS_SHUTDOWN_ERROR: self.rfs_shutdown_error,
        }

    def ensure_dirs(self) -> None:
        """Create runtime directories if they don't exist."""
        self.runtime_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(exist_ok=True)


# Global singleton
config = KillerConfig()
