from __future__ import annotations

import logging

from ..context import Mode, RunContext
from ..errors import AlreadyInstalledError, WorkflowStopped

logger = logging.getLogger(__name__)


class CheckInstallationStateStep:
    """Idempotency gate: the vendor uninstaller on disk means "installed"."""

    step_id = "20_check_installation_state"

    def run(self, ctx: RunContext) -> None:
        installed = ctx.is_installed()
        ctx.decisions["already_installed"] = installed

        if ctx.mode is Mode.INSTALL and installed:
            raise AlreadyInstalledError(
                "DisplayLink driver already appears to be installed. "
                "To reinstall, please uninstall first (--uninstall)."
            )
        if ctx.mode is Mode.UNINSTALL and not installed:
            raise WorkflowStopped("DisplayLink driver does not appear to be installed. Nothing to do.")
