"""mdtest CLI: run a markdown document as a test plan."""

from pathlib import Path
from typing import Any

import typer

from mdtest import __version__

from .config import load_config
from .constants import EXIT_FAILURE
from .core import run
from .errors import SetupError, StepFailure
from .logging import configure_logging
from .output import OutputContext, set_output_context
from .services import check_testdir_free, read_document, resolve_document, resolve_workdir


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mdtest {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="mdtest",
    help="Run the sh and file-exist code blocks of a markdown document as tests",
    add_completion=False,
)


def _failure_data(error: StepFailure) -> dict[str, Any]:
    """Describe the failing step for JSON output."""
    if error.step is None:
        return {}
    return {
        "step": error.step.index,
        "line": error.step.line,
        "kind": error.step.kind.value,
    }


@app.command()
def main(
    file: Path = typer.Argument(
        ...,
        help="Markdown file",
        show_default=False,
    ),
    testdir: Path | None = typer.Option(
        None,
        "--testdir",
        metavar="DIR",
        help="Copy the document's directory into DIR (must not exist) and run there",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: mdtest.toml beside the document)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Run every sh and file-exist block in FILE, stopping at the first failure."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    ctx = OutputContext(console=console, json_mode=json_output)
    set_output_context(ctx)

    try:
        document_path = resolve_document(file)
        if testdir is not None:
            testdir = check_testdir_free(testdir)
        document = read_document(document_path)
        config = load_config(config_path, directory=document_path.parent)
        workdir = resolve_workdir(document_path, testdir)
    except SetupError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_FAILURE) from None

    try:
        run(document, cwd=workdir, config=config)
    except StepFailure as e:
        ctx.failure(str(e), _failure_data(e))
        raise typer.Exit(EXIT_FAILURE) from None

    ctx.success("All tests passed", {"document": str(document_path), "workdir": str(workdir)})
