"""Allow running mdtest as ``python -m mdtest``."""

from .cli import app

if __name__ == "__main__":
    app(prog_name="mdtest")
