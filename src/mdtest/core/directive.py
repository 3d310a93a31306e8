"""Fence info string parsing.

An info string is a comma separated list of tokens. The first token picks
the step kind, every following token must be ``ignore``::

    sh
    sh, ignore
    file-exist,ignore

Anything else means the block is ordinary markdown, not a test step. A
misspelled modifier therefore disables the step without an error.
"""

from ..models import StepKind, TestStep

IGNORE_MODIFIER = "ignore"

_KINDS = {kind.value: kind for kind in StepKind}


def parse_directive(info: str) -> TestStep | None:
    """Parse a fence info string into an empty test step.

    Args:
        info: Text after the opening fence delimiter

    Returns:
        New TestStep with kind and skip set, or None if info is not a directive
    """
    first, *modifiers = (token.strip() for token in info.split(","))

    kind = _KINDS.get(first)
    if kind is None:
        return None

    step = TestStep(kind=kind)
    for modifier in modifiers:
        if modifier != IGNORE_MODIFIER:
            return None
        step.skip = True

    return step
