from __future__ import annotations

import logging

from ..context import InstallationArtifact, RunContext
from ..errors import AlreadyInstalledError, VendorInstallerError
from ..lib.command import CommandError, run_cmd
from ..lib.fetch import download, extract_zip, find_installer, make_executable
from ..lib.pkg import apt_has_package, apt_try_install
from ..lib.workdir import scoped_workdir
from ..logging_utils import SUCCESS

logger = logging.getLogger(__name__)


class InstallDriverStep:
    step_id = "50_install_driver"

    def _try_package_catalog(self, ctx: RunContext) -> bool:
        """Install from the distribution's own catalog when it ships the driver."""

        package = ctx.config.apt_package
        logger.info("Attempting to install %s via the package manager...", package)
        if not apt_has_package(package):
            logger.info("%s is not available from apt; using the vendor installer", package)
            return False
        r = apt_try_install(package)
        if not r.ok:
            logger.warning("apt could not install %s (rc=%s); using the vendor installer", package, r.returncode)
            return False
        logger.log(SUCCESS, "DisplayLink driver installed via apt")
        return True

    def _install_from_vendor_archive(self, ctx: RunContext) -> None:
        cfg = ctx.config
        with scoped_workdir(cfg.work_dir) as tmp:
            archive = tmp / cfg.archive_name
            ctx.artifact = InstallationArtifact(archive_path=archive)

            logger.info("Downloading DisplayLink driver from Synaptics...")
            download(cfg.driver_url, archive)
            logger.log(SUCCESS, "Download complete.")

            logger.info("Extracting the driver archive...")
            extract_zip(archive, tmp)
            installer = find_installer(tmp, cfg.installer_glob)
            ctx.artifact = InstallationArtifact(archive_path=archive, installer_path=installer)

            logger.info("Making the installer executable...")
            make_executable(installer)

            logger.info("Running the DisplayLink installer. Please follow its prompts...")
            try:
                run_cmd([str(installer)], cwd=str(installer.parent), interactive=True)
            except CommandError as e:
                raise VendorInstallerError(f"{installer.name} exited with status {e.returncode}") from e

    def run(self, ctx: RunContext) -> None:
        if ctx.is_installed():
            raise AlreadyInstalledError(
                "DisplayLink driver already appears to be installed. To reinstall, please uninstall first."
            )

        logger.info("Installing DisplayLink driver...")
        if ctx.config.apt_fast_path and self._try_package_catalog(ctx):
            ctx.decisions["install_method"] = "apt"
        else:
            self._install_from_vendor_archive(ctx)
            ctx.decisions["install_method"] = "vendor"

        logger.log(SUCCESS, "Installation finished successfully!")
