"""Core markdown-to-test-plan pipeline for mdtest.

- scanner: markdown document to event stream
- directive: fence info string to test step
- executor: event stream to executed steps, fail-fast
"""

from .directive import parse_directive
from .executor import ExecutorState, TestPlanExecutor, run
from .scanner import scan

__all__ = [
    "ExecutorState",
    "TestPlanExecutor",
    "parse_directive",
    "run",
    "scan",
]
