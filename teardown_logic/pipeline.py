"""
Sequential executor for termination steps.
"""

from typing import Callable, Optional, Sequence

from .progress_indicator import ProgressIndicator


class PipelineExecutor:
    """
    Runs steps one at a time in the given order.

    The first step that raises stops the run and its exception reaches the caller
    as-is. Steps already executed are not compensated.
    """

    def __init__(
        self,
        steps: Sequence[Callable[[], None]],
        progress: Optional[ProgressIndicator] = None,
    ):
        self.steps = list(steps)
        self.progress = progress

    def run(self):
        if self.progress is not None:
            self.progress.start(len(self.steps))

        for step in self.steps:
            if self.progress is not None:
                self.progress.next_step(
                    getattr(step, "description", getattr(step, "__name__", "step"))
                )
            step()

    def __call__(self):
        return self.run()


def new_pipeline_executor(
    *steps: Callable[[], None], progress: Optional[ProgressIndicator] = None
) -> PipelineExecutor:
    return PipelineExecutor(steps, progress=progress)
