"""Filesystem helpers."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

from ..core.errors import CollaboratorError

logger = logging.getLogger(__name__)
OPEN_FOLDER_TIMEOUT = 10


def ensure_directory(path: Path) -> Path:
    """Create a directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)
    return path


def list_files_with_extensions(root: Path, extensions: set[str]) -> list[Path]:
    """Return sorted list of files in root with given extensions."""

    if not root.exists():
        return []
    files = [p for p in root.iterdir() if p.is_file() and p.suffix.lower() in extensions]
    return sorted(files)


def save_text_file(contents: str, folder: Path, filename: str = "sprite.css") -> Path:
    """Write text into ``folder/filename``, creating the folder as needed."""

    target = Path(folder) / filename
    try:
        ensure_directory(target.parent)
        target.write_text(contents, encoding="utf-8")
    except OSError as exc:
        raise CollaboratorError("save", f"Could not write {target}: {exc}") from exc
    logger.info("Wrote stylesheet to %s", target)
    return target


def open_folder(path: Path) -> None:
    """Reveal a folder in the platform file browser; failures are only logged."""

    try:
        if sys.platform.startswith("win"):
            os.startfile(str(path))  # type: ignore[attr-defined]
        else:
            # open/xdg-open hand off to the file browser and exit, so the child is reaped here.
            command = "open" if sys.platform == "darwin" else "xdg-open"
            subprocess.run([command, str(path)], check=True, timeout=OPEN_FOLDER_TIMEOUT)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("Could not open output folder %s: %s", path, exc)
