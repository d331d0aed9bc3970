from __future__ import annotations

import datetime as _dt
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import IO, Optional

DEFAULT_LOG_PATH = "/var/log/displaylink-installer.log"
FALLBACK_LOG_NAME = "displaylink-installer.log"

# Between INFO and WARNING: a step finished and the operator should see it.
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class ConsoleFormatter(logging.Formatter):
    """Short, colour-coded status lines for the operator's terminal."""

    RESET = "\033[0m"
    COLORS = {
        logging.DEBUG: "\033[0;37m",
        logging.INFO: "\033[1;34m",
        SUCCESS: "\033[1;32m",
        logging.WARNING: "\033[1;33m",
        logging.ERROR: "\033[1;31m",
        logging.CRITICAL: "\033[1;31m",
    }
    MARKERS = {
        logging.DEBUG: "[.]",
        logging.INFO: "[*]",
        SUCCESS: "[✔]",
        logging.WARNING: "[!]",
        logging.ERROR: "[✖]",
        logging.CRITICAL: "[✖]",
    }

    def __init__(self, *, use_color: bool = True):
        super().__init__(fmt="%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        marker = self.MARKERS.get(record.levelno, "[*]")
        line = f"{marker} {super().format(record)}"
        if not self.use_color:
            return line
        color = self.COLORS.get(record.levelno, "")
        return f"{color}{line}{self.RESET}"


def _stream_is_tty(stream: IO[str]) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _open_log_file(path: str, header: str) -> logging.FileHandler:
    # Truncate and stamp the header, then append for the rest of the run.
    Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(header + "\n")
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _log_candidates(log_path: str) -> list[str]:
    candidates = [log_path]
    for directory in (str(Path.cwd()), tempfile.gettempdir()):
        path = os.path.join(directory, FALLBACK_LOG_NAME)
        if path not in candidates:
            candidates.append(path)
    return candidates


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(getattr(root, "_displaylink_handlers", [])):
        root.removeHandler(h)
        h.close()
    setattr(root, "_displaylink_handlers", [])


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.DEBUG,
    also_console: bool = True,
    console_level: int = logging.INFO,
    console_stream: Optional[IO[str]] = None,
    version: str = "",
) -> Optional[str]:
    """Configure logging for one installer run.

    The log file is truncated and starts with a timestamped header. If the
    requested path cannot be written (e.g. /var/log as a normal user), we
    fall back to a file in the working directory, then in the system temp
    directory. When none of them can be written the run logs to the console
    only.

    Calling this again replaces the handlers installed by a previous call.

    Returns the actual file path being used, or None for console only.
    """

    root = logging.getLogger()
    root.setLevel(level)
    _remove_our_handlers(root)

    stamp = _dt.datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
    header = f"--- DisplayLink Installer Log: {stamp}"
    if version:
        header += f" (version {version})"
    header += " ---"

    handlers: list[logging.Handler] = []
    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    chosen_path: Optional[str] = None
    failures: list[str] = []
    for candidate in _log_candidates(log_path):
        try:
            file_handler = _open_log_file(candidate, header)
        except OSError as e:
            failures.append(f"{candidate}: {e}")
            continue
        chosen_path = candidate
        file_handler.setFormatter(fmt)
        file_handler.setLevel(level)
        handlers.append(file_handler)
        break

    if also_console:
        stream = console_stream if console_stream is not None else sys.stdout
        console = logging.StreamHandler(stream)
        console.setFormatter(ConsoleFormatter(use_color=_stream_is_tty(stream)))
        console.setLevel(console_level)
        handlers.append(console)

    for h in handlers:
        root.addHandler(h)

    setattr(root, "_displaylink_handlers", handlers)
    setattr(root, "_displaylink_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    if chosen_path is None:
        logging.getLogger(__name__).warning(
            "Could not write a log file (%s); logging to the console only", "; ".join(failures)
        )
    elif chosen_path != log_path:
        logging.getLogger(__name__).warning(
            "Could not write %s; logging to %s instead", log_path, chosen_path
        )
    return chosen_path


def active_log_path() -> Optional[str]:
    return getattr(logging.getLogger(), "_displaylink_log_path", None)
