from __future__ import annotations

import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .logging_utils import DEFAULT_LOG_PATH

DEFAULT_DRIVER_URL = (
    "https://www.synaptics.com/sites/default/files/Ubuntu/"
    "DisplayLink%20USB%20Graphics%20Software%20for%20Ubuntu5.8-EXE.zip"
)
DEFAULT_DEPENDENCIES = [
    "dkms",
    "build-essential",
    "libdrm-dev",
    "unzip",
    "wget",
    "linux-headers-{kernel_release}",
]
DEFAULT_STALE_PATHS = ["/etc/apt/sources.list.d/synaptics.list"]

# These two names come from the vendor installer's own layout.
DEFAULT_UNINSTALLER_PATH = "/usr/bin/displaylink-uninstall"
DEFAULT_SERVICE_UNIT = "dlm.service"


def _as_str_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list")
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def log_path(self) -> str:
        return str(self.raw.get("log_path") or DEFAULT_LOG_PATH)

    @property
    def driver_url(self) -> str:
        return str(self.raw.get("driver_url") or DEFAULT_DRIVER_URL)

    @property
    def archive_name(self) -> str:
        return str(self.raw.get("archive_name") or "displaylink.zip")

    @property
    def installer_glob(self) -> str:
        return str(self.raw.get("installer_glob") or "displaylink-driver-*.run")

    @property
    def uninstaller_path(self) -> str:
        return str(self.raw.get("uninstaller_path") or DEFAULT_UNINSTALLER_PATH)

    @property
    def service_unit(self) -> str:
        return str(self.raw.get("service_unit") or DEFAULT_SERVICE_UNIT)

    @property
    def kernel_module(self) -> str:
        return str(self.raw.get("kernel_module") or "evdi")

    @property
    def apt_package(self) -> str:
        return str(self.raw.get("apt_package") or "displaylink-driver")

    @property
    def apt_fast_path(self) -> bool:
        value = self.raw.get("apt_fast_path", True)
        if not isinstance(value, bool):
            raise ConfigError("apt_fast_path must be true or false")
        return value

    @property
    def dependencies(self) -> List[str]:
        pkgs = self.raw.get("dependencies")
        names = DEFAULT_DEPENDENCIES if pkgs is None else _as_str_list(pkgs, "dependencies")
        kernel_release = platform.release()
        return [n.replace("{kernel_release}", kernel_release) for n in names]

    @property
    def stale_paths(self) -> List[str]:
        paths = self.raw.get("stale_paths")
        return list(DEFAULT_STALE_PATHS) if paths is None else _as_str_list(paths, "stale_paths")

    @property
    def supported_distributions(self) -> List[str]:
        ids = self.raw.get("supported_distributions")
        names = ["ubuntu"] if ids is None else _as_str_list(ids, "supported_distributions")
        return [n.lower() for n in names]

    @property
    def usb_vendor_ids(self) -> List[str]:
        ids = self.raw.get("usb_vendor_ids")
        names = ["17e9"] if ids is None else _as_str_list(ids, "usb_vendor_ids")
        return [n.lower() for n in names]

    @property
    def usb_vendor_name(self) -> str:
        return str(self.raw.get("usb_vendor_name") or "DisplayLink")

    @property
    def os_release_path(self) -> str:
        return str(self.raw.get("os_release_path") or "/etc/os-release")

    @property
    def work_dir(self) -> Optional[str]:
        """Parent for the scoped temporary directory (None = system default)."""
        value = self.raw.get("work_dir")
        return str(value) if value else None

    def with_overrides(self, **overrides: Any) -> "InstallerConfig":
        raw = dict(self.raw)
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return InstallerConfig(raw=raw)


def load_config(path: Optional[str]) -> InstallerConfig:
    """Load a YAML config file; no path means built-in defaults."""

    if path is None:
        return InstallerConfig()

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")

    cfg = InstallerConfig(raw=raw)
    # Typed keys are checked now so a bad file fails before the run starts.
    cfg.apt_fast_path
    cfg.dependencies
    cfg.stale_paths
    cfg.supported_distributions
    cfg.usb_vendor_ids
    return cfg
