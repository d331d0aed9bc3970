from __future__ import annotations

import logging

from ..context import Mode, RunContext
from ..logging_utils import SUCCESS, active_log_path

logger = logging.getLogger(__name__)

NEXT_STEPS = [
    "1. A system reboot is required to activate the DisplayLink drivers",
    "2. After reboot, connect your monitors to the DisplayLink dock",
    "3. Your displays should be detected automatically",
]

TROUBLESHOOTING = [
    "xrandr --listmonitors",
    "xrandr --auto",
    "xrandr --setprovideroutputsource 1 0",
]


class ReportStep:
    step_id = "85_report"

    def run(self, ctx: RunContext) -> None:
        log_path = active_log_path() or ctx.invocation.log_path

        if ctx.mode is Mode.UNINSTALL:
            logger.log(SUCCESS, "DisplayLink driver removed.")
            logger.warning("A reboot is recommended to ensure all components are unloaded.")
        else:
            logger.log(SUCCESS, "Installation completed successfully!")
            logger.info("=== NEXT STEPS ===")
            for line in NEXT_STEPS:
                logger.info("%s", line)
            logger.info("=== TROUBLESHOOTING ===")
            logger.info("If displays don't appear after reboot, try these commands:")
            for cmd in TROUBLESHOOTING:
                logger.info("  %s", cmd)

        if log_path:
            logger.info("Log saved to: %s", log_path)
        else:
            logger.warning("No log file could be written; only console output is available")
