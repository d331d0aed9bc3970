from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .context import RunContext
from .errors import WorkflowStopped

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single workflow step."""

    step_id: str

    def run(self, ctx: RunContext) -> None:
        ...


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    stopped_at: Optional[str] = None
    stop_reason: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.stopped_at is None


def run_pipeline(*, ctx: RunContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first error aborts the run.

    A step may end the workflow early as a success by raising WorkflowStopped.
    """

    result = PipelineResult()

    for step in steps:
        ctx.decisions["current_step"] = step.step_id
        logger.debug("Running step %s", step.step_id)
        try:
            step.run(ctx)
        except WorkflowStopped as stop:
            logger.info("%s", stop.reason)
            result.ran_steps.append(step.step_id)
            result.stopped_at = step.step_id
            result.stop_reason = stop.reason
            break
        result.ran_steps.append(step.step_id)

    ctx.decisions["current_step"] = None
    return result
