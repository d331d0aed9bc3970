from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import InstallerConfig, load_config
from .context import InvocationContext, Mode, RunContext
from .errors import ConfigError, InstallerError
from .lib.env import is_privileged
from .lib.signals import interrupt_on_signals
from .logging_utils import DEFAULT_LOG_PATH, active_log_path, configure_logging
from .pipeline import PipelineResult, Step, run_pipeline
from .prompts import ConsolePrompter, Prompter, ScriptedPrompter
from .steps import (
    CheckInstallationStateStep,
    CleanupStaleStateStep,
    DetectEnvironmentStep,
    InstallDependenciesStep,
    InstallDriverStep,
    PromptRebootStep,
    ReportStep,
    RequirePrivilegeStep,
    UninstallDriverStep,
    VerifyInstallationStep,
)

logger = logging.getLogger(__name__)

PROG = "displaylink-installer"


def build_steps(mode: Mode) -> List[Step]:
    if mode is Mode.UNINSTALL:
        return [
            RequirePrivilegeStep(),
            CheckInstallationStateStep(),
            UninstallDriverStep(),
            ReportStep(),
            PromptRebootStep(),
        ]
    return [
        RequirePrivilegeStep(),
        DetectEnvironmentStep(),
        CheckInstallationStateStep(),
        InstallDependenciesStep(),
        CleanupStaleStateStep(),
        InstallDriverStep(),
        VerifyInstallationStep(),
        ReportStep(),
        PromptRebootStep(),
    ]


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Bad input is a plain failure (1), not argparse's usage code (2).
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\nUse --help for usage information.\n")


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog=PROG,
        add_help=False,
        allow_abbrev=False,
        description="Install or uninstall the DisplayLink driver on Ubuntu-based systems.",
        epilog="This tool must be run with root privileges (e.g., sudo).",
    )
    action = p.add_mutually_exclusive_group()
    action.add_argument(
        "--install",
        dest="mode",
        action="store_const",
        const=Mode.INSTALL.value,
        help="Install the DisplayLink driver (default action).",
    )
    action.add_argument(
        "--uninstall",
        dest="mode",
        action="store_const",
        const=Mode.UNINSTALL.value,
        help="Uninstall the DisplayLink driver.",
    )
    action.add_argument(
        "-h",
        "--help",
        dest="mode",
        action="store_const",
        const=Mode.HELP.value,
        help="Display this help and exit.",
    )
    p.add_argument("--config", default=None, help="YAML configuration file")
    p.add_argument("--log", default=None, help=f"Path to installer log (default: {DEFAULT_LOG_PATH})")
    p.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never wait for input; every question is answered with its default (no).",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(mode=Mode.INSTALL.value)
    return p


def resolve_action(
    argv: Optional[List[str]] = None,
    parser: Optional[argparse.ArgumentParser] = None,
) -> tuple[Mode, argparse.Namespace]:
    args = (parser or build_parser()).parse_args(argv)
    return Mode(args.mode), args


def run(
    *,
    invocation: InvocationContext,
    config: InstallerConfig,
    prompter: Prompter,
) -> PipelineResult:
    """Run the workflow for invocation.mode. Errors propagate to the caller."""

    ctx = RunContext(invocation=invocation, config=config, prompter=prompter)
    logger.info("Action selected: %s", invocation.mode.value)
    result = run_pipeline(ctx=ctx, steps=build_steps(invocation.mode))
    logger.debug("Run decisions: %s", ctx.decisions)
    return result


def execute(
    *,
    invocation: InvocationContext,
    config: InstallerConfig,
    prompter: Prompter,
) -> int:
    """Run the workflow and map its outcome to a process exit code."""

    log_path = active_log_path() or invocation.log_path

    def point_at_log(message: str) -> None:
        if log_path:
            logger.info("%s: %s", message, log_path)
        else:
            logger.warning("No log file could be written; only console output is available")

    try:
        with interrupt_on_signals():
            run(invocation=invocation, config=config, prompter=prompter)
    except KeyboardInterrupt:
        logger.error("Installation interrupted by user")
        point_at_log("Log saved to")
        return 130
    except InstallerError as e:
        logger.debug("Run failed", exc_info=True)
        logger.error("Error: %s", e)
        point_at_log("See the log file for details")
        return e.exit_code
    except Exception:
        logger.exception("Installer failed")
        point_at_log("See the log file for details")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    mode, args = resolve_action(argv, parser)

    if mode is Mode.HELP:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config).with_overrides(log_path=args.log)
    except ConfigError as e:
        parser.exit(1, f"{parser.prog}: error: {e}\n")

    log_path = configure_logging(log_path=config.log_path, version=__version__)

    invocation = InvocationContext(
        mode=mode,
        is_privileged=is_privileged(),
        log_path=log_path,
        interactive=not args.non_interactive,
    )
    prompter: Prompter = ConsolePrompter() if invocation.interactive else ScriptedPrompter()

    return execute(invocation=invocation, config=config, prompter=prompter)


if __name__ == "__main__":
    raise SystemExit(main())
