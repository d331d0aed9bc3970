from __future__ import annotations

import logging

from ..context import RunContext
from ..errors import DependencyInstallError
from ..lib.command import CommandError
from ..lib.pkg import apt_install, apt_update, is_installed
from ..logging_utils import SUCCESS

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "30_install_dependencies"

    def run(self, ctx: RunContext) -> None:
        packages = ctx.config.dependencies
        logger.info("Installing necessary dependencies (%s)...", ", ".join(packages))

        installed: list[str] = []
        present: list[str] = []
        try:
            apt_update()
            for package in packages:
                if is_installed(package):
                    logger.info("%s is already installed", package)
                    present.append(package)
                    continue
                logger.info("Installing %s...", package)
                apt_install([package])
                installed.append(package)
        except CommandError as e:
            # A missing toolchain or header package breaks the vendor DKMS build later.
            raise DependencyInstallError(f"Package manager failed: {e}") from e

        ctx.decisions["dependencies"] = {"installed": installed, "present": present}
        logger.log(SUCCESS, "Dependencies installed successfully.")
