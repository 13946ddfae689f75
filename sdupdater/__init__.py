"""Tools for managing homebrew console SD card content: archives, cheats, network profiles and settings."""

__version__ = "2.23.2"

__all__ = [
    "constants",
    "progress",
    "fsutil",
    "utils",
    "extract",
    "netprofile",
    "progress_text",
    "tabs",
]