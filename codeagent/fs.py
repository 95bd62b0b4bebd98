"""File system helpers: locating, reading and writing source files."""

from __future__ import annotations

import os
import stat


def get_current_working_directory() -> str:
    try:
        return os.getcwd()
    except OSError:
        return ""


def _search(directory: str, target: str) -> str | None:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    found: str | None = None
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            nested = _search(entry.path, target)
            if nested is not None:
                found = nested
        elif entry.name.lower() == target:
            # The rest of this directory is skipped; the walk goes on elsewhere.
            found = entry.path
            break
    return found


def find_file(file_name: str, working_dir: str | os.PathLike[str]) -> str:
    """Find a file by case-insensitive name below ``working_dir``.

    When several directories hold a match, the one visited last in lexical
    walk order wins.
    """
    target = file_name.lower()
    root = os.fspath(working_dir)
    info = os.lstat(root)
    if stat.S_ISDIR(info.st_mode):
        found = _search(root, target)
    elif os.path.basename(os.path.normpath(root)).lower() == target:
        found = root
    else:
        found = None
    if found is None:
        raise FileNotFoundError(f"file not found: {file_name}")
    return found


def read_file(file_path: str | os.PathLike[str]) -> bytes:
    try:
        with open(file_path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise OSError(exc.errno, f"failed to read file: {exc.strerror}", exc.filename) from exc


def write_file(file_path: str | os.PathLike[str], code: bytes | str) -> None:
    data = code.encode("utf-8") if isinstance(code, str) else code
    try:
        fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise OSError(exc.errno, f"failed to write file: {exc.strerror}", exc.filename) from exc