from __future__ import annotations

import logging
from typing import Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update() -> None:
    run_cmd(["apt-get", "update"], env=_APT_ENV)


def is_installed(package: str) -> bool:
    r = run_cmd(["dpkg-query", "-W", "-f=${Status}", package], check=False)
    return r.ok and "install ok installed" in r.stdout


def apt_install(packages: Sequence[str]) -> None:
    if not packages:
        return
    run_cmd(["apt-get", "install", "-y", *packages], env=_APT_ENV)


def apt_has_package(package: str) -> bool:
    """Return True if apt knows about a package name.

    Useful for optional packages that only exist in some releases.
    """
    r = run_cmd(["apt-cache", "show", package], check=False)
    return r.ok and bool(r.stdout.strip())


def apt_try_install(package: str) -> CmdResult:
    """Install without raising; the caller decides what a failure means."""

    return run_cmd(["apt-get", "install", "-y", package], check=False, env=_APT_ENV)
