"""mdtest: run the shell recipes in a markdown document as tests."""

from .config import MdtestConfig, ShellConfig, load_config
from .core import TestPlanExecutor, run
from .errors import (
    MdtestError,
    MissingFile,
    SetupError,
    ShellExecutionError,
    ShellScriptFailure,
    StepFailure,
)

__version__ = "0.1.0"

__all__ = [
    "MdtestConfig",
    "MdtestError",
    "MissingFile",
    "SetupError",
    "ShellConfig",
    "ShellExecutionError",
    "ShellScriptFailure",
    "StepFailure",
    "TestPlanExecutor",
    "__version__",
    "load_config",
    "run",
]
