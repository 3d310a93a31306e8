"""Filesystem operations for mdtest.

Covers the two places mdtest touches the filesystem directly:
- file-exist steps, which check listed paths
- document loading and sandbox preparation done before a run
"""

import logging
import os
import shutil
from pathlib import Path

from ..errors import MissingFile, SetupError

logger = logging.getLogger(__name__)


def check_paths_exist(body: str, cwd: Path) -> None:
    """Check that every non-empty line of body names an existing path.

    Relative paths are resolved against cwd. Symlinks are followed and
    directories count as existing. A path that cannot be checked at all
    (too long, unreadable parent) counts as missing.

    Args:
        body: One path per line
        cwd: Directory relative paths are resolved against

    Raises:
        MissingFile: For the first path, in line order, that does not exist
    """
    for line in body.splitlines():
        if not line:
            continue
        logger.debug(f"Checking {line}")
        if not os.path.exists(cwd / line):
            raise MissingFile(line)


def resolve_document(path: Path) -> Path:
    """Canonicalize the document path and make sure it is a regular file.

    Raises:
        SetupError: If the path does not exist or is not a file
    """
    try:
        resolved = path.resolve(strict=True)
    except OSError as e:
        raise SetupError(f"{path}: {e.strerror or e}") from e

    if not resolved.is_file():
        raise SetupError(f"{resolved} is not a file")
    return resolved


def read_document(path: Path) -> str:
    """Read the document as UTF-8 text.

    Raises:
        SetupError: If the file cannot be read or decoded
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SetupError(f"Cannot read {path}: {e}") from e


def check_testdir_free(testdir: Path) -> Path:
    """Return testdir as an absolute path, refusing one that already exists.

    Raises:
        SetupError: If testdir exists
    """
    if testdir.exists():
        raise SetupError(f"{testdir} exists")
    return testdir.absolute()


def prepare_sandbox(document: Path, testdir: Path) -> Path:
    """Copy everything beside document into a new testdir.

    Entries are listed before testdir is created, so a testdir inside
    the document's directory is not copied into itself. Directories are
    copied recursively and symlinks are copied as symlinks.

    Args:
        document: Canonical path of the markdown document
        testdir: Directory to create; must not exist yet

    Returns:
        Absolute path of the populated testdir

    Raises:
        SetupError: If testdir exists or copying fails
    """
    testdir = check_testdir_free(testdir)
    entries = sorted(document.parent.iterdir())

    try:
        testdir.mkdir(parents=True)
        for entry in entries:
            target = testdir / entry.name
            if entry.is_dir() and not entry.is_symlink():
                shutil.copytree(entry, target, symlinks=True)
            else:
                shutil.copy2(entry, target, follow_symlinks=False)
    except OSError as e:
        raise SetupError(f"Cannot prepare {testdir}: {e}") from e

    logger.info(f"Copied {len(entries)} entries from {document.parent} to {testdir}")
    return testdir


def resolve_workdir(document: Path, testdir: Path | None = None) -> Path:
    """Pick the directory steps run in.

    With a testdir the document's siblings are copied there first;
    otherwise steps run beside the document.
    """
    if testdir is not None:
        return prepare_sandbox(document, testdir)
    return document.parent
