"""Exceptions raised by mdtest."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TestStep


class MdtestError(Exception):
    """Base exception for mdtest errors."""


class SetupError(MdtestError):
    """Raised when the document or its working directory cannot be prepared."""


class StepFailure(MdtestError):
    """A test step failed; the message is the full diagnostic.

    The executor attaches the failing step as ``step`` before re-raising.
    """

    step: TestStep | None = None


class ShellExecutionError(StepFailure):
    """The shell could not be spawned or communicated with."""


class ShellScriptFailure(StepFailure):
    """The shell ran the script and exited unsuccessfully."""

    def __init__(self, script: str, stdout: str, stderr: str, returncode: int) -> None:
        self.script = script
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(
            f"shell:\n\ncode {{\n{script}\n}}\n\nstdout {{\n{stdout}\n}}\n\nstderr {{\n{stderr}\n}}"
        )


class MissingFile(StepFailure):
    """A path listed in a file-exist step does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"file-exist: {path} does not exist")
