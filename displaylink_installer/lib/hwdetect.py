from __future__ import annotations

import logging
import re
import shlex
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..context import UsbDevice
from .command import run_cmd

logger = logging.getLogger(__name__)

_LSUSB_LINE = re.compile(
    r"^Bus\s+(?P<bus>\d+)\s+Device\s+(?P<device>\d+):\s+ID\s+"
    r"(?P<vendor>[0-9a-fA-F]{4}):(?P<product>[0-9a-fA-F]{4})\s*(?P<desc>.*)$"
)


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release(5) KEY=value lines (values may be shell-quoted)."""

    info: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("\"'")]
        info[key.strip()] = parts[0] if parts else ""
    return info


def _read_os_release(path: str) -> Optional[Dict[str, str]]:
    try:
        return parse_os_release(Path(path).read_text(encoding="utf-8", errors="ignore"))
    except OSError:
        return None


def _lsb_release() -> Optional[Dict[str, str]]:
    r_id = run_cmd(["lsb_release", "-si"], check=False)
    if not r_id.ok:
        return None
    r_ver = run_cmd(["lsb_release", "-sr"], check=False)
    name = r_id.stdout.strip()
    return {
        "ID": name.lower(),
        "NAME": name,
        "VERSION_ID": r_ver.stdout.strip() if r_ver.ok else "",
    }


def detect_distribution(os_release_path: str = "/etc/os-release") -> Dict[str, str]:
    """Best-effort OS identity: os-release first, then lsb_release.

    Returns an empty dict when neither source is available.
    """

    info = _read_os_release(os_release_path)
    if info:
        return info
    logger.debug("%s not readable; trying lsb_release", os_release_path)
    return _lsb_release() or {}


def distribution_family(info: Dict[str, str]) -> List[str]:
    ids = [info.get("ID", "").lower()]
    ids += [t.lower() for t in info.get("ID_LIKE", "").split()]
    return [i for i in ids if i]


def is_supported(info: Dict[str, str], supported: Iterable[str]) -> bool:
    wanted = {s.lower() for s in supported}
    return any(i in wanted for i in distribution_family(info))


def parse_lsusb(text: str) -> List[UsbDevice]:
    devices: List[UsbDevice] = []
    for line in text.splitlines():
        m = _LSUSB_LINE.match(line.strip())
        if not m:
            continue
        devices.append(
            UsbDevice(
                bus=m.group("bus"),
                device=m.group("device"),
                vendor_id=m.group("vendor").lower(),
                product_id=m.group("product").lower(),
                description=m.group("desc").strip(),
            )
        )
    return devices


def find_vendor_devices(
    devices: Iterable[UsbDevice],
    *,
    vendor_ids: Iterable[str],
    vendor_name: str,
) -> Tuple[UsbDevice, ...]:
    ids = {v.lower() for v in vendor_ids}
    name = vendor_name.lower()
    return tuple(
        d for d in devices if d.vendor_id in ids or (name and name in d.description.lower())
    )


def detect_usb_devices(*, vendor_ids: Iterable[str], vendor_name: str) -> Tuple[UsbDevice, ...]:
    """Attached USB devices matching the vendor signature (empty if lsusb is unusable)."""

    r = run_cmd(["lsusb"], check=False)
    if not r.ok:
        logger.warning("lsusb failed (rc=%s); cannot check for %s devices", r.returncode, vendor_name)
        return ()
    return find_vendor_devices(parse_lsusb(r.stdout), vendor_ids=vendor_ids, vendor_name=vendor_name)
