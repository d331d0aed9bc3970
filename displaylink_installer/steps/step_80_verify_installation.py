from __future__ import annotations

import logging

from ..context import RunContext
from ..lib.services import module_loaded, unit_registered
from ..logging_utils import SUCCESS

logger = logging.getLogger(__name__)


class VerifyInstallationStep:
    """Informational only: nothing here can fail the run."""

    step_id = "80_verify_installation"

    def run(self, ctx: RunContext) -> None:
        cfg = ctx.config
        logger.info("Verifying installation...")

        try:
            service = unit_registered(cfg.service_unit)
        except Exception:
            logger.debug("Service check failed", exc_info=True)
            service = False
        if service:
            logger.log(SUCCESS, "DisplayLink service (%s) is installed", cfg.service_unit)
        else:
            logger.warning("DisplayLink service not found, but installation may still work")

        try:
            loaded = module_loaded(cfg.kernel_module)
        except Exception:
            logger.debug("Module check failed", exc_info=True)
            loaded = False
        if loaded:
            logger.log(SUCCESS, "%s kernel module is loaded", cfg.kernel_module.upper())
        else:
            logger.info("%s kernel module not yet loaded (normal before reboot)", cfg.kernel_module.upper())

        ctx.decisions["verification"] = {
            "service_registered": service,
            "module_loaded": loaded,
        }
