"""Which tabs and tools are shown, the saved hide settings, and the language list."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

from .constants import HIDE_TABS_JSON
from .fsutil import parse_json_file, write_json_to_file
from .utils import get_bool_value

APP_VERSION = "2.23.2"

# Keys of the hide settings file, in the order the settings page lists them.
HIDE_KEYS = (
    "about",
    "atmosphere",
    "cfw",
    "firmwares",
    "cheats",
    "custom",
    "outdatedtitles",
    "jccolor",
    "pccolor",
    "downloadpayload",
    "rebootpayload",
    "netsettings",
    "browser",
    "move",
    "cleanup",
    "language",
)

MAIN_TABS = ("about", "atmosphere", "cfw", "firmwares", "cheats", "custom", "tools")

UPDATE_APP = "update_app"
HIDE_TABS = "hide_tabs"
CHANGELOG = "changelog"
REBOOT_PAYLOAD = "rebootpayload"

_HIDEABLE_TOOLS = (
    "cheats",
    "outdatedtitles",
    "jccolor",
    "pccolor",
    REBOOT_PAYLOAD,
    "netsettings",
    "browser",
    "move",
    "cleanup",
    "language",
)

LANGUAGES = (
    ("American English ({})", "en-US"),
    ("日本語 ({})", "ja"),
    ("Français ({})", "fr"),
    ("Deutsch ({})", "de"),
    ("Italiano ({})", "it"),
    ("Español ({})", "es"),
    ("Português ({})", "pt-BR"),
    ("Nederlands ({})", "nl"),
    ("Русский ({})", "ru"),
    ("Română ({})", "ro"),
    ("한국어 ({})", "ko"),
    ("Polski ({})", "pl"),
    ("简体中文 ({})", "zh-CN"),
    ("繁體中文 ({})", "zh-TW"),
    ("English (Great Britain) ({})", "en-GB"),
    ("Français (Canada) ({})", "fr-CA"),
    ("Español (Latinoamérica) ({})", "es-419"),
    ("Português brasileiro ({})", "pt-BR"),
    ("Traditional Chinese ({})", "zh-Hant"),
    ("Simplified Chinese ({})", "zh-Hans"),
)


def load_hide_status(path: str | os.PathLike = HIDE_TABS_JSON) -> dict[str, bool]:
    """Return the hidden flag of every settings key; missing keys count as shown.

    Raises TypeError if a stored value is not a boolean.
    """
    data = parse_json_file(path)
    return {key: get_bool_value(data, key) for key in HIDE_KEYS}


def save_hide_status(status: Mapping[str, Any], path: str | os.PathLike = HIDE_TABS_JSON) -> None:
    """Write the hidden flag of every settings key, replacing the file."""
    data = {key: bool(status.get(key, False)) for key in HIDE_KEYS}
    write_json_to_file(data, path)


def visible_main_tabs(hide_status: Any) -> list[str]:
    """Return the main tabs that are not hidden, in display order."""
    return [tab for tab in MAIN_TABS if not get_bool_value(hide_status, tab)]


def visible_tools(
    hide_status: Any,
    erista: bool = True,
    tag: str = "",
    app_version: str = APP_VERSION,
) -> list[str]:
    """Return the entries of the tools tab, in display order.

    An update entry leads when tag names a release other than app_version;
    payload injection is offered on Erista units only. The hide-tabs and
    changelog entries are always present.
    """
    tools: list[str] = []
    if tag and tag != app_version:
        tools.append(UPDATE_APP)
    for tool in _HIDEABLE_TOOLS:
        if tool == REBOOT_PAYLOAD and not erista:
            continue
        if not get_bool_value(hide_status, tool):
            tools.append(tool)
    tools.append(HIDE_TABS)
    tools.append(CHANGELOG)
    return tools


def available_languages(romfs_root: str | os.PathLike) -> list[tuple[str, str]]:
    """Return (label, locale) for each language whose translation exists under romfs_root."""
    root = Path(romfs_root)
    return [
        (label.format(code), code)
        for label, code in LANGUAGES
        if (root / "i18n" / code / "menus.json").exists()
    ]