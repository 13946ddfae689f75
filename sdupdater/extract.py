"""Unpacking of downloaded archives and management of installed cheat files."""

from __future__ import annotations

import os
import shutil
import zipfile
from pathlib import Path
from typing import Callable, Iterable, Sequence

from .constants import (
    AMS_CONTENTS,
    AMS_PATH,
    CHEATS_VERSION,
    CONTENTS_PATH,
    FILES_IGNORE,
    REBOOT_PAYLOAD_PATH,
    REINX_CONTENTS,
    REINX_PATH,
    ROOT_PATH,
    SXOS_PATH,
    SXOS_TITLES,
    TITLES_PATH,
    UPDATE_BIN_PATH,
    Cfw,
)
from .fsutil import copy_file, free_storage, read_line_by_line, remove_dir
from .progress import ProgressEvent, get_progress
from .utils import get_app_path, save_to_file

STORAGE_MARGIN = 1.1
TITLE_ID_LENGTH = 16
CHEATS_SUFFIX = "/cheats"

# Files that are in use while the system runs; they are staged next to the original.
_STAGED_FILES = frozenset({"/atmosphere/package3", "/atmosphere/stratosphere.romfs"})

_CFW_LAYOUT = {
    Cfw.AMS: (AMS_PATH, AMS_CONTENTS, CONTENTS_PATH),
    Cfw.RNX: (REINX_PATH, REINX_CONTENTS, CONTENTS_PATH),
    Cfw.SXOS: (SXOS_PATH, SXOS_TITLES, TITLES_PATH),
}

ConfirmCallback = Callable[[str, str], bool]


class InsufficientStorageError(OSError):
    """Raised when an archive would not fit in the free space left."""

    def __init__(self, archive_path: str, required: int, available: int) -> None:
        super().__init__(
            f"not enough free space to extract {archive_path}: "
            f"{required} bytes needed, {available} available"
        )
        self.archive_path = archive_path
        self.required = required
        self.available = available


def _under(root: str | os.PathLike, path: str) -> Path:
    return Path(root) / path.lstrip("/")


def uncompressed_size(archive_path: str | os.PathLike) -> int:
    """Return the total uncompressed size of the archive's entries, in bytes."""
    with zipfile.ZipFile(archive_path) as archive:
        return sum(info.file_size for info in archive.infolist())


def ensure_available_storage(archive_path: str | os.PathLike, free_bytes: int | None = None) -> int:
    """Check that the archive fits, with a ten percent margin, into free_bytes.

    When free_bytes is None no check is made. Returns the uncompressed size;
    raises InsufficientStorageError when it does not fit.
    """
    size = uncompressed_size(archive_path)
    if free_bytes is not None and size * STORAGE_MARGIN > free_bytes:
        raise InsufficientStorageError(str(archive_path), size, free_bytes)
    return size


def _check_storage(archive_path: str | os.PathLike, location: str | os.PathLike) -> None:
    try:
        free = free_storage(location)
    except OSError:
        free = None
    ensure_available_storage(archive_path, free)


def _extract_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, target: str) -> None:
    if target.endswith("/"):
        Path(target).mkdir(parents=True, exist_ok=True)
        return
    Path(target).parent.mkdir(parents=True, exist_ok=True)
    with archive.open(info) as source, open(target, "wb") as destination:
        shutil.copyfileobj(source, destination)


def _is_ignored(rooted_name: str, ignore_list: Iterable[str]) -> bool:
    return any(rooted_name.find(ignored) in (0, 1) for ignored in ignore_list)


def extract(
    archive_path: str | os.PathLike,
    working_path: str = ROOT_PATH,
    preserve_inis: bool = False,
    ignore_list: Iterable[str] | None = None,
    app_path: str | None = None,
    progress: ProgressEvent | None = None,
    confirm_reboot_payload: ConfirmCallback | None = None,
) -> None:
    """Unpack every entry of the archive below working_path (which ends in '/').

    Entries listed in ignore_list, and .ini files when preserve_inis is set,
    are only written when absent. The running application at app_path is never
    overwritten. A hekate payload is also copied to the update.bin location, and
    to the reboot payload location when confirm_reboot_payload approves.
    """
    _check_storage(archive_path, working_path)
    if progress is None:
        progress = get_progress()
    ignored = set(ignore_list) if ignore_list is not None else read_line_by_line(FILES_IGNORE)
    if app_path is None:
        app_path = get_app_path()
    update_bin = working_path + UPDATE_BIN_PATH.lstrip("/")
    reboot_payload = working_path + REBOOT_PAYLOAD_PATH.lstrip("/")

    with zipfile.ZipFile(archive_path) as archive:
        entries = archive.infolist()
        progress.max = len(entries)
        progress.current = 0
        for index, info in enumerate(entries):
            if progress.interrupt:
                break
            name = info.filename
            target = working_path + name
            rooted = "/" + name.lstrip("/")
            if target != app_path:
                if (preserve_inis and target.endswith(".ini")) or _is_ignored(rooted, ignored):
                    if not os.path.exists(target):
                        _extract_entry(archive, info, target)
                elif rooted in _STAGED_FILES:
                    _extract_entry(archive, info, target + ".aio")
                else:
                    _extract_entry(archive, info, target)
                    if rooted.startswith("/hekate_ctcaer"):
                        copy_file(target, update_bin)
                        if confirm_reboot_payload is not None and confirm_reboot_payload(
                            update_bin, reboot_payload
                        ):
                            copy_file(update_bin, reboot_payload)
            progress.current = index
    progress.finish()


def exclude_titles(path: str | os.PathLike, listed_titles: Sequence[str]) -> list[str]:
    """Return listed_titles without those named, case-insensitively, in the file at path."""
    excluded: set[str] = set()
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            lines = handle.read().split("\n")
    except OSError:
        lines = []
    listed = set(listed_titles)
    for line in lines:
        upper = line.upper()
        if upper in listed:
            excluded.add(upper)
    return [title for title in listed_titles if title not in excluded]


def write_titles_to_file(titles: Iterable[str], path: str | os.PathLike) -> None:
    """Write the titles, sorted, one per line, replacing the file."""
    with open(path, "w", encoding="utf-8") as handle:
        for title in sorted(set(titles)):
            handle.write(title + "\n")


def _prepare_cheats_root(cfw: Cfw, root: str | os.PathLike) -> tuple[Path, int]:
    base, contents, prefix = _CFW_LAYOUT[cfw]
    base_dir = _under(root, base)
    base_dir.mkdir(parents=True, exist_ok=True)
    _under(root, contents).mkdir(exist_ok=True)
    return base_dir, len(prefix)


def extract_cheats(
    archive_path: str | os.PathLike,
    titles: Sequence[str],
    cfw: Cfw,
    version: str,
    root: str | os.PathLike = ROOT_PATH,
    extract_all: bool = False,
    progress: ProgressEvent | None = None,
) -> None:
    """Unpack the cheat folders of the archive into the firmware's contents directory.

    Only titles whose first 13 id characters match one of titles are unpacked,
    unless extract_all is set. The cheats version is recorded unless it is
    empty or 'offline'.
    """
    _check_storage(archive_path, root)
    if progress is None:
        progress = get_progress()
    base_dir, offset = _prepare_cheats_root(cfw, root)
    prefixes = [title[:13].lower() for title in titles]
    marker_start = offset + TITLE_ID_LENGTH
    marker_end = marker_start + len(CHEATS_SUFFIX)

    with zipfile.ZipFile(archive_path) as archive:
        entries = archive.infolist()
        progress.max = len(entries)
        progress.current = 0
        for index, info in enumerate(entries):
            if progress.interrupt:
                break
            name = info.filename
            if len(name) > marker_end and name[marker_start:marker_end].lower() == CHEATS_SUFFIX:
                wanted = extract_all or name[offset : offset + 13].lower() in prefixes
                if wanted:
                    _extract_entry(archive, info, os.path.join(base_dir, name))
            progress.current = index

    if version not in ("offline", ""):
        version_file = _under(root, CHEATS_VERSION)
        version_file.parent.mkdir(parents=True, exist_ok=True)
        save_to_file(version, version_file)
    progress.finish()


def extract_all_cheats(
    archive_path: str | os.PathLike,
    cfw: Cfw,
    version: str,
    root: str | os.PathLike = ROOT_PATH,
    progress: ProgressEvent | None = None,
) -> None:
    """Unpack the cheats of every title in the archive."""
    extract_cheats(archive_path, [], cfw, version, root, extract_all=True, progress=progress)


def remove_cheats_directory(entry: str | os.PathLike) -> bool:
    """Remove the cheats folder of a title, then the title folder if it is left empty."""
    entry_path = Path(entry)
    result = True
    cheats = entry_path / "cheats"
    if cheats.exists():
        result &= remove_dir(cheats)
    if entry_path.is_dir():
        empty = not any(entry_path.iterdir())
    else:
        empty = entry_path.stat().st_size == 0
    if empty:
        result &= remove_dir(entry_path)
    return result


def _remove_cheats_where(
    contents_path: str | os.PathLike,
    version_file: str | os.PathLike,
    progress: ProgressEvent | None,
    should_remove: Callable[[Path], bool],
) -> None:
    if progress is None:
        progress = get_progress()
    entries = sorted(Path(contents_path).iterdir())
    progress.max = len(entries) + 1
    for entry in entries:
        if progress.interrupt:
            break
        if should_remove(entry):
            remove_cheats_directory(entry)
        progress.increment_step(1)
    Path(version_file).unlink(missing_ok=True)
    progress.finish()


def remove_cheats(
    contents_path: str | os.PathLike,
    version_file: str | os.PathLike = CHEATS_VERSION,
    progress: ProgressEvent | None = None,
) -> None:
    """Remove the cheats of every title under contents_path and forget the cheats version."""
    _remove_cheats_where(contents_path, version_file, progress, lambda entry: True)


def remove_orphaned_cheats(
    contents_path: str | os.PathLike,
    installed_titles: Iterable[str],
    version_file: str | os.PathLike = CHEATS_VERSION,
    progress: ProgressEvent | None = None,
) -> None:
    """Remove the cheats of titles that are not installed and forget the cheats version."""
    installed = {title.lower() for title in installed_titles}
    _remove_cheats_where(
        contents_path, version_file, progress, lambda entry: entry.name.lower() not in installed
    )


def is_bid(bid: str) -> bool:
    """Return whether bid consists of hexadecimal digits only."""
    return all(char in "0123456789abcdefABCDEF" for char in bid)