"""External side effects for mdtest.

This package holds everything that touches processes or the filesystem:
- shell: runs `sh` steps in a subprocess
- filesystem: file-exist checks, document loading and sandbox setup
"""

from .filesystem import (
    check_paths_exist,
    check_testdir_free,
    prepare_sandbox,
    read_document,
    resolve_document,
    resolve_workdir,
)
from .shell import build_script, run_shell_script

__all__ = [
    "build_script",
    "check_paths_exist",
    "check_testdir_free",
    "prepare_sandbox",
    "read_document",
    "resolve_document",
    "resolve_workdir",
    "run_shell_script",
]
