"""Test plan executor.

Consumes scanner events one at a time and runs each recognized fenced
block as soon as it closes. The first failing step stops the run.

States:
- IDLE: no open step; fence starts are checked for a directive
- ACCUMULATING: one open step collecting text until its fence ends
- FAILED: a step failed; all further events are ignored
"""

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from ..config import MdtestConfig
from ..errors import StepFailure
from ..models import Event, FenceEnd, FenceStart, StepKind, TestStep, Text
from ..services import check_paths_exist, run_shell_script
from .directive import parse_directive
from .scanner import scan

logger = logging.getLogger(__name__)


class ExecutorState(str, Enum):
    """States of the test plan executor."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FAILED = "failed"


class TestPlanExecutor:
    """Runs the test steps of one or more markdown documents.

    The working directory is fixed at construction and passed to every
    step; the process-wide current directory is never changed, so several
    executors can run in one process.

    Example:
        >>> executor = TestPlanExecutor(Path("docs"))
        >>> executor.run(Path("docs/README.md").read_text())
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(self, cwd: Path, config: MdtestConfig | None = None) -> None:
        self.cwd = cwd
        self.config = config or MdtestConfig()
        self.state = ExecutorState.IDLE
        self.current: TestStep | None = None
        self.steps_seen = 0
        self.steps_run = 0
        self.steps_skipped = 0

    def feed(self, event: Event) -> None:
        """Advance the state machine by one event.

        Raises:
            StepFailure: If the event closed a step that then failed
        """
        if self.state is ExecutorState.FAILED:
            return

        if isinstance(event, FenceStart):
            self._open(event)
        elif isinstance(event, Text):
            if self.current is not None:
                self.current.append(event.chunk)
        elif isinstance(event, FenceEnd):
            step, self.current = self.current, None
            self.state = ExecutorState.IDLE
            if step is not None:
                try:
                    self.execute(step)
                except StepFailure:
                    self.state = ExecutorState.FAILED
                    raise

    def finish(self) -> None:
        """Signal end of stream; an unterminated step is dropped."""
        if self.current is not None:
            logger.debug(
                f"Dropping unterminated step {self.current.index} at line {self.current.line}"
            )
        self.current = None
        if self.state is ExecutorState.ACCUMULATING:
            self.state = ExecutorState.IDLE

    def run_events(self, events: Iterable[Event]) -> None:
        """Feed every event, then finish. Stops at the first failure."""
        for event in events:
            self.feed(event)
        self.finish()

    def run(self, document: str) -> None:
        """Scan document and run its test steps in order.

        Raises:
            StepFailure: For the first step that fails
        """
        self.run_events(scan(document))
        logger.debug(
            f"Finished: {self.steps_run} run, {self.steps_skipped} skipped "
            f"of {self.steps_seen} steps"
        )

    def execute(self, step: TestStep) -> None:
        """Run a single step in the executor's working directory.

        Raises:
            StepFailure: If the step fails; the step is attached as ``.step``
        """
        if step.skip:
            logger.info(f"Skipping step {step.index} ({step.kind.value}) at line {step.line}")
            self.steps_skipped += 1
            return

        logger.info(f"Running step {step.index} ({step.kind.value}) at line {step.line}")
        try:
            if step.kind is StepKind.SHELL:
                run_shell_script(step.body, self.cwd, self.config.shell)
            elif step.kind is StepKind.FILE_EXIST:
                check_paths_exist(step.body, self.cwd)
        except StepFailure as e:
            e.step = step
            raise
        self.steps_run += 1

    def _open(self, event: FenceStart) -> None:
        step = parse_directive(event.info)
        if step is None:
            if event.info.strip():
                logger.debug(f"Ignoring fence at line {event.line} with info {event.info!r}")
            self.current = None
            self.state = ExecutorState.IDLE
            return

        self.steps_seen += 1
        step.index = self.steps_seen
        step.line = event.line
        self.current = step
        self.state = ExecutorState.ACCUMULATING


def run(document: str, cwd: Path | None = None, config: MdtestConfig | None = None) -> None:
    """Run every test step in a markdown document.

    Args:
        document: Markdown text
        cwd: Directory steps run in (default: current directory at call time)
        config: mdtest configuration (default: built-in defaults)

    Raises:
        StepFailure: For the first failing step; ``str()`` is the diagnostic
    """
    TestPlanExecutor(cwd or Path.cwd(), config).run(document)
