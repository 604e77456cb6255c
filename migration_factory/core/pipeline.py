"""
Migration Pipeline - sequential, individually committed steps

Workflow:
1. Print the step title in a box
2. Run the step (it writes its own files)
3. Next step

No transaction and no rollback: when step N raises, steps 1..N-1 stay
applied and the error propagates to the caller. The operator reviews and
commits the result by hand.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..log import get_logger


@dataclass
class Step:
    title: str
    action: Callable[[], None]


@dataclass
class PipelineResult:
    title: str
    completed: List[str] = field(default_factory=list)


def box(title: str) -> str:
    line = "─" * (len(title) + 2)
    return f"┌{line}┐\n│ {title} │\n└{line}┘"


class MigrationPipeline:
    """
    Usage:
        pipeline = MigrationPipeline('React 18', [
            Step('Update core React dependencies', update_core),
            Step('Install dependencies (npm install)', npm_install),
        ])
        result = pipeline.run()
        # → PipelineResult(title='React 18', completed=[...])
    """

    def __init__(self, title: str, steps: List[Step], logger=None, echo: Optional[Callable[[str], None]] = None):
        self.title = title
        self.steps = steps
        self.logger = logger or get_logger("pipeline")
        self.echo = echo or print

    def run(self) -> PipelineResult:
        result = PipelineResult(title=self.title)
        for step in self.steps:
            self.echo("\n" + box(step.title))
            self.logger.debug(f"[{self.title}] step: {step.title}")
            step.action()
            result.completed.append(step.title)
        return result
