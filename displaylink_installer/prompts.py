"""Operator prompts.

The workflow never calls ``input()`` directly; it asks a ``Prompter``. The
console prompter reads the terminal, the scripted one replays fixed answers
(used for --non-interactive runs and in tests). Both fall back to the
question's default when no answer is available.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Protocol

logger = logging.getLogger(__name__)

YES = {"y", "yes"}


class Prompter(Protocol):
    def ask(self, question: str, default: str = "") -> str:
        ...


class ConsolePrompter:
    def __init__(self, reader: Callable[[str], str] = input):
        self._reader = reader

    def ask(self, question: str, default: str = "") -> str:
        try:
            answer = self._reader(question)
        except EOFError:
            logger.debug("No operator input available; using default %r", default)
            return default
        return answer.strip() or default


class ScriptedPrompter:
    def __init__(self, answers: Optional[Iterable[str]] = None):
        self._answers: List[str] = list(answers or [])
        self.questions: List[str] = []

    def ask(self, question: str, default: str = "") -> str:
        self.questions.append(question)
        if not self._answers:
            return default
        return self._answers.pop(0).strip() or default


def confirm(prompter: Prompter, question: str, *, default: bool = False) -> bool:
    """Yes/no question. Only an explicit yes counts as yes when default is no."""

    suffix = "(Y/n)" if default else "(y/N)"
    answer = prompter.ask(f"{question} {suffix}: ", "y" if default else "n")
    accepted = answer.lower() in YES
    logger.debug("Prompt %r answered %r -> %s", question, answer, accepted)
    return accepted
