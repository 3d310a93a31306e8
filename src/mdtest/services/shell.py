"""Shell step runner for mdtest."""

import logging
import subprocess
from pathlib import Path

from ..config import ShellConfig
from ..errors import ShellExecutionError, ShellScriptFailure

logger = logging.getLogger(__name__)


def build_script(body: str, prelude: str) -> str:
    """Prefix body with the strict-mode prelude."""
    if not prelude:
        return body
    return f"{prelude}\n{body}"


def run_shell_script(body: str, cwd: Path, config: ShellConfig | None = None) -> None:
    """Run body as a shell script and wait for it to finish.

    The script is fed on stdin to ``<shell> -s``; stdout and stderr are
    captured in full. There is no timeout.

    Args:
        body: Script text exactly as written in the document
        cwd: Working directory for the shell
        config: Shell binary and prelude (default: bash with set -euo pipefail)

    Raises:
        ShellExecutionError: If the shell cannot be started or fed its input
        ShellScriptFailure: If the script exits unsuccessfully
    """
    config = config or ShellConfig()
    cmd = [config.exec, "-s"]
    logger.debug(f"Running {' '.join(cmd)} in {cwd}")

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            input=build_script(body, config.prelude).encode(),
            capture_output=True,
        )
    except OSError as e:
        raise ShellExecutionError(f"shell: {e}") from e

    logger.debug(f"Shell exited with code {result.returncode}")
    if result.returncode != 0:
        raise ShellScriptFailure(
            script=body,
            stdout=result.stdout.decode(errors="replace"),
            stderr=result.stderr.decode(errors="replace"),
            returncode=result.returncode,
        )
