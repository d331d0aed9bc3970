from __future__ import annotations

import logging

from ..context import RunContext
from ..errors import VendorUninstallerError, WorkflowStopped
from ..lib.command import CommandError, run_cmd
from ..logging_utils import SUCCESS

logger = logging.getLogger(__name__)


class UninstallDriverStep:
    step_id = "55_uninstall_driver"

    def run(self, ctx: RunContext) -> None:
        if not ctx.is_installed():
            raise WorkflowStopped("DisplayLink driver does not appear to be installed. Nothing to do.")

        uninstaller = ctx.config.uninstaller_path
        logger.info("Running the DisplayLink uninstaller...")
        # The uninstaller is interactive; hand it the terminal.
        try:
            run_cmd([uninstaller], interactive=True)
        except CommandError as e:
            raise VendorUninstallerError(f"{uninstaller} exited with status {e.returncode}") from e

        logger.log(SUCCESS, "Uninstallation complete.")
