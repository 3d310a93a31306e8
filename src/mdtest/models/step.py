"""Test step model for fenced code blocks.

A test step is built from one fenced block whose info string carries a
recognized directive (``sh`` or ``file-exist``, optionally followed by
``ignore``). The executor owns at most one open step at a time.
"""

from enum import Enum

from pydantic import BaseModel, Field


class StepKind(str, Enum):
    """Kinds of test steps, keyed by their directive token."""

    SHELL = "sh"
    FILE_EXIST = "file-exist"


class TestStep(BaseModel):
    """Typed, possibly skipped unit of test logic from a single fence.

    Attributes:
        kind: What the body means (shell script or list of paths).
        skip: True if the directive carried the ``ignore`` modifier.
        body: Text of the fenced block, accumulated chunk by chunk.
        index: 1-based position among the document's recognized steps.
        line: 1-based source line of the opening fence, if known.

    Example:
        >>> step = TestStep(kind=StepKind.SHELL)
        >>> step.append("echo hello\\n")
        >>> step.body
        'echo hello\\n'
    """

    __test__ = False  # keep pytest from collecting this class

    kind: StepKind = Field(description="Directive kind selected by the first token")
    skip: bool = Field(default=False, description="Set by the ignore modifier")
    body: str = Field(default="", description="Accumulated block text")
    index: int = Field(default=0, description="1-based ordinal among recognized steps")
    line: int | None = Field(default=None, description="Source line of the opening fence")

    def append(self, text: str) -> None:
        """Append a text chunk to the body."""
        self.body += text
