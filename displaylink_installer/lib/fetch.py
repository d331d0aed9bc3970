from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Optional

from ..errors import DownloadError, ExtractionError, InstallerNotFoundError, VendorInstallerError
from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)


def download(url: str, dest: Path) -> Path:
    """Fetch url to dest with wget; any failure is a DownloadError."""

    try:
        run_cmd(["wget", "-O", str(dest), url])
    except CommandError as e:
        raise DownloadError(
            f"Failed to download {url} (rc={e.returncode}). "
            "Check your internet connection and try again."
        ) from e
    if not dest.exists():
        raise DownloadError(f"Download reported success but {dest} is missing")
    return dest


def extract_zip(archive: Path, dest_dir: Path) -> Path:
    try:
        run_cmd(["unzip", "-o", str(archive), "-d", str(dest_dir)])
    except CommandError as e:
        raise ExtractionError(f"Failed to extract {archive.name} (rc={e.returncode})") from e
    return dest_dir


def find_installer(root: Path, pattern: str) -> Path:
    """Locate the vendor .run installer; its file name changes between releases."""

    matches = sorted(p for p in root.rglob(pattern) if p.is_file())
    if not matches:
        raise InstallerNotFoundError(
            f"Could not find an installer matching {pattern!r} in the archive; "
            "the download layout may have changed"
        )
    if len(matches) > 1:
        logger.warning("Several installers match %s; using %s", pattern, matches[-1].name)
    return matches[-1]


def make_executable(path: Path, mode: Optional[int] = None) -> None:
    try:
        current = path.stat().st_mode
        os.chmod(path, mode if mode is not None else current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise VendorInstallerError(f"Could not make {path.name} executable: {e}") from e
