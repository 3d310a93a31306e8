"""Pydantic data models for mdtest.

This package defines the data structures passed between the scanner
and the executor:
- Scanner events (FenceStart, Text, FenceEnd, Other)
- Test steps built from fenced blocks (StepKind, TestStep)
"""

from .events import Event, FenceEnd, FenceStart, Other, Text
from .step import StepKind, TestStep

__all__ = [
    "Event",
    "FenceEnd",
    "FenceStart",
    "Other",
    "StepKind",
    "TestStep",
    "Text",
]
