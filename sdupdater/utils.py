"""Assorted helpers: archive checks, title formatting, payload lookup and JSON access."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from .constants import (
    AMS_PATH,
    BOOTLOADER_PATH,
    BOOTLOADER_PL_PATH,
    CONTENTS_PATH,
    FUSEE_MTC,
    FUSEE_SECONDARY,
    NRO_PATH,
    NRO_PATH_REGEX,
    PAYLOAD_PATH,
    REINX_PATH,
    ROOT_PATH,
    SXOS_PATH,
    TITLES_PATH,
    Cfw,
)

ZIP_SIGNATURE = b"PK\x03\x04"
ELLIPSIS = "\u2026"

_PAYLOAD_DIRECTORIES = (
    ROOT_PATH,
    PAYLOAD_PATH,
    AMS_PATH,
    REINX_PATH,
    BOOTLOADER_PATH,
    BOOTLOADER_PL_PATH,
    SXOS_PATH,
)

_CONTENTS_PATHS = {
    Cfw.AMS: AMS_PATH + CONTENTS_PATH,
    Cfw.RNX: REINX_PATH + CONTENTS_PATH,
    Cfw.SXOS: SXOS_PATH + TITLES_PATH,
}

_ERROR_TEXTS = {
    500: "Internal Server Error",
    503: "Service Temporarily Unavailable",
}


def is_archive(path: str | os.PathLike) -> bool:
    """Return whether path exists and starts with a zip local-file signature."""
    try:
        with open(path, "rb") as handle:
            return handle.read(len(ZIP_SIGNATURE)) == ZIP_SIGNATURE
    except OSError:
        return False


def format_list_item_title(text: str, max_score: int = 140) -> str:
    """Shorten text with an ellipsis once its width score passes max_score.

    Upper-case characters score 4, everything else 3.
    """
    score = 0
    for index, char in enumerate(text):
        score += 4 if char.isascii() and char.isupper() else 3
        if score > max_score:
            prefix = text if index == 0 else text[: index - 1]
            return prefix + ELLIPSIS
    return text


def format_application_id(application_id: int) -> str:
    """Return the id as sixteen upper-case hexadecimal digits."""
    return f"{application_id:016X}"


def get_error_message(status_code: int) -> str:
    """Return a human-readable message for an HTTP status code."""
    text = _ERROR_TEXTS.get(status_code)
    if text is None:
        return f"error: {status_code}"
    return f"{status_code}: {text}"


def read_file(path: str | os.PathLike) -> str:
    """Return the first whitespace-separated word of path, or '' if there is none."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""
    words = content.split()
    return words[0] if words else ""


def save_to_file(text: str, path: str | os.PathLike) -> None:
    """Write text followed by a newline, replacing the file."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text + "\n")


def _under_root(root: str | os.PathLike, path: str) -> Path:
    return Path(root) / path.lstrip("/")


def fetch_payloads(root: str | os.PathLike = ROOT_PATH) -> list[str]:
    """Return the .bin payloads found in the usual payload directories under root.

    The fusee stages inside the atmosphere directory are left out.
    """
    excluded = {_under_root(root, FUSEE_SECONDARY), _under_root(root, FUSEE_MTC)}
    result: list[str] = []
    for directory in _PAYLOAD_DIRECTORIES:
        folder = _under_root(root, directory)
        if not folder.exists():
            continue
        for entry in sorted(folder.iterdir()):
            if entry.suffix == ".bin" and entry not in excluded:
                result.append(str(entry))
    return result


def remove_sysmodules_flags(directory: str | os.PathLike) -> None:
    """Delete every file below directory whose path contains 'boot2.flag'."""
    for current, _dirs, files in os.walk(directory):
        for name in files:
            full = os.path.join(current, name)
            if "boot2.flag" in full:
                os.remove(full)


def get_contents_path(cfw: Cfw) -> str:
    """Return the directory in which this firmware keeps per-title contents."""
    return _CONTENTS_PATHS[cfw]


def get_bool_value(data: Any, key: str) -> bool:
    """Return the boolean stored under key, False if absent.

    Raises TypeError if the stored value is not a boolean.
    """
    if not isinstance(data, dict) or key not in data:
        return False
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f"value of {key!r} is not a boolean")
    return value


def get_value_from_key(data: Any, key: str) -> Any:
    """Return the value stored under key, or an empty dict if absent."""
    if isinstance(data, dict) and key in data:
        return data[key]
    return {}


def get_app_path(argv: str | None = None) -> str:
    """Return the application path named in the launch arguments, or the default one."""
    if argv:
        match = re.fullmatch(NRO_PATH_REGEX, argv)
        if match:
            return match.group(1)
    return NRO_PATH


def existing_cheats_tids(contents_path: str | os.PathLike) -> set[str]:
    """Return the upper-cased title ids under contents_path that have a cheats folder."""
    result: set[str] = set()
    for entry in Path(contents_path).iterdir():
        if (entry / "cheats").exists():
            result.add(str(entry)[-16:].upper())
    return result