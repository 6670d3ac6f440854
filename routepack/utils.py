"""
routepack Utility Functions

Filesystem helpers used while writing build output.
"""

import os
import shutil
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def write(file: PathLike, data: str) -> Path:
    """Write a text file, creating parent directories as needed."""
    file = Path(file)
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(data, encoding="utf-8")
    return file


def rimraf(path: PathLike) -> None:
    """Recursively delete a file or directory if it exists."""
    path = Path(path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def copy_tree(source: PathLike, destination: PathLike) -> Path:
    """Copy a directory tree into ``destination``, merging with existing files."""
    destination = Path(destination)
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return destination


def posix_relative(from_dir: PathLike, to_path: PathLike) -> str:
    """
    Relative path between two locations, always with forward slashes.

    Example:
        posix_relative(".build/tmp/fn-0", ".build/server") -> "../../server"
    """
    relative = os.path.relpath(Path(to_path).resolve(), Path(from_dir).resolve())
    return Path(relative).as_posix()
