"""File-system helpers: JSON files, copying, directory trees and line lists."""

from __future__ import annotations

import json
import os
import shutil
from contextlib import ExitStack
from pathlib import Path
from typing import Any


def split_string(text: str, delimiter: str) -> list[str]:
    """Split text on delimiter, dropping a single trailing empty field."""
    parts = text.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def remove_dir(path: str | os.PathLike) -> bool:
    """Remove a directory recursively; return whether it succeeded."""
    try:
        shutil.rmtree(path)
    except OSError:
        return False
    return True


def parse_json_file(path: str | os.PathLike) -> Any:
    """Return the JSON document in path, or an empty dict if it is missing or invalid."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        content = ""
    try:
        return json.loads(content)
    except ValueError:
        return {}


def write_json_to_file(data: Any, path: str | os.PathLike) -> None:
    """Write data as JSON indented by four spaces."""
    with open(path, "w", encoding="utf-8") as out:
        json.dump(data, out, indent=4, ensure_ascii=False)


def copy_file(source: str | os.PathLike, destination: str | os.PathLike) -> bool:
    """Copy source to destination byte for byte; return whether both could be opened.

    The destination is opened (and truncated) even when the source cannot be read.
    """
    with ExitStack() as stack:
        try:
            src = stack.enter_context(open(source, "rb"))
        except OSError:
            src = None
        try:
            dst = stack.enter_context(open(destination, "wb"))
        except OSError:
            dst = None
        if src is None or dst is None:
            return False
        shutil.copyfileobj(src, dst)
    return True


def copy_files(path: str | os.PathLike) -> list[str]:
    """Carry out the "source|destination" copies listed in path.

    Returns the sources that were missing or had no destination, in file order;
    an empty list means every copy was made.
    """
    missing: list[str] = []
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return missing
    for line in text.splitlines():
        if not line:
            continue
        fields = split_string(line, "|")
        source = fields[0] if fields else ""
        if len(fields) > 1 and os.path.exists(source):
            copy_file(source, fields[1])
        else:
            missing.append(source)
    return missing


def create_tree(path: str) -> None:
    """Create every directory leading up to the last '/' in path."""
    index = path.rfind("/")
    if index < 0:
        return
    Path(path[: index + 1]).mkdir(parents=True, exist_ok=True)


def read_line_by_line(path: str | os.PathLike) -> set[str]:
    """Return the set of non-empty lines of path, each without a trailing CR."""
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except OSError:
        return set()
    result: set[str] = set()
    for line in text.split("\n"):
        if line:
            if line.endswith("\r"):
                line = line[:-1]
            result.add(line)
    return result


def free_storage(path: str | os.PathLike) -> int:
    """Return the free bytes on the volume holding path."""
    return shutil.disk_usage(path).free