from __future__ import annotations

import logging

from ..context import RunContext
from ..lib.services import reboot
from ..prompts import confirm

logger = logging.getLogger(__name__)


class PromptRebootStep:
    step_id = "90_prompt_reboot"

    def run(self, ctx: RunContext) -> None:
        logger.warning("A system reboot is required to complete the changes.")
        if confirm(ctx.prompter, "Would you like to reboot now?", default=False):
            logger.info("Rebooting system...")
            ctx.decisions["reboot"] = True
            reboot()
            return

        ctx.decisions["reboot"] = False
        logger.info("Reboot postponed.")
        logger.warning("Remember to reboot your system before using DisplayLink devices.")
