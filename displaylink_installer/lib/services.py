from __future__ import annotations

import logging

from ..errors import RebootError
from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)


def unit_registered(unit: str) -> bool:
    """Best-effort: is a systemd unit file known to systemctl."""

    r = run_cmd(["systemctl", "list-unit-files", "--no-legend", unit], check=False)
    return r.ok and any(line.split()[:1] == [unit] for line in r.stdout.splitlines() if line.strip())


def module_loaded(module: str) -> bool:
    r = run_cmd(["lsmod"], check=False)
    if not r.ok:
        return False
    return any(line.split()[:1] == [module] for line in r.stdout.splitlines()[1:])


def reboot() -> None:
    try:
        run_cmd(["reboot"])
    except CommandError as e:
        raise RebootError(
            f"Reboot command failed (rc={e.returncode}); please reboot manually"
        ) from e
