from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .config import InstallerConfig
from .prompts import Prompter


class Mode(str, enum.Enum):
    INSTALL = "install"
    UNINSTALL = "uninstall"
    HELP = "help"


@dataclass(frozen=True)
class InvocationContext:
    mode: Mode
    is_privileged: bool
    log_path: Optional[str]
    interactive: bool = True


@dataclass(frozen=True)
class UsbDevice:
    bus: str
    device: str
    vendor_id: str
    product_id: str
    description: str

    def __str__(self) -> str:
        return f"Bus {self.bus} Device {self.device}: ID {self.vendor_id}:{self.product_id} {self.description}".rstrip()


@dataclass(frozen=True)
class EnvironmentProbe:
    distribution_name: str
    distribution_version: str
    detected_devices: Tuple[UsbDevice, ...] = ()

    @property
    def device_present(self) -> bool:
        return bool(self.detected_devices)


@dataclass(frozen=True)
class InstallationArtifact:
    archive_path: Path
    installer_path: Optional[Path] = None


@dataclass
class RunContext:
    """Everything a step needs; passed explicitly instead of module globals."""

    invocation: InvocationContext
    config: InstallerConfig
    prompter: Prompter
    probe: Optional[EnvironmentProbe] = None
    artifact: Optional[InstallationArtifact] = None
    decisions: Dict[str, Any] = field(default_factory=dict)

    @property
    def mode(self) -> Mode:
        return self.invocation.mode

    def is_installed(self) -> bool:
        return Path(self.config.uninstaller_path).exists()
