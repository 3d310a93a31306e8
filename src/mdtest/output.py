"""Output formatting for mdtest CLI."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape


@dataclass
class OutputContext:
    """Context for output formatting."""

    console: Console
    json_mode: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format.

        Messages are printed verbatim; script bodies and captured output
        may contain square brackets that Rich would read as markup.
        """
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {escape(message)}[/red]", soft_wrap=True)

    def failure(self, diagnostic: str, data: dict[str, Any] | None = None) -> None:
        """Print a step failure with its multi-line diagnostic."""
        if self.json_mode:
            self.print_json({"error": diagnostic, **(data or {})})
        else:
            self.console.print("[red]Error:[/red]\n")
            self.console.print(diagnostic, markup=False, highlight=False, soft_wrap=True)

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format."""
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{message}[/green]")


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by CLI.
    """
    if _ctx is None:
        return OutputContext(Console(stderr=True))
    return _ctx


def set_output_context(ctx: OutputContext | None) -> None:
    """Set the global output context. Called by the CLI entry point."""
    global _ctx
    _ctx = ctx
