# sdupdater

A library for managing the contents of a homebrew console's SD card. It
unpacks update archives and installs and removes cheat files. It also edits
network profile settings and keeps track of which menu entries the user has
hidden. It uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `sdupdater.constants`

This module holds the well-known SD card paths, such as `CONFIG_PATH`,
`CHEATS_VERSION`, `FILES_IGNORE`, `HIDE_TABS_JSON` and `UPDATE_BIN_PATH`.

It also has two enums:

- `ContentType`: the kinds of downloadable content.
- `Cfw`: the custom firmware flavours `AMS`, `RNX` and `SXOS`.

Two functions go with them:

- `archive_filename(content_type)` gives the download location of a content
  type's archive. It gives `None` for types that have no archive.
- `content_type_name(content_type)` gives the key that names the content type
  in a links document.

### `sdupdater.progress`

`ProgressEvent` is a dataclass that holds the state of a long task. Its fields
are:

- `current` and `max`: the step count and its maximum.
- `now`, `total` and `speed`: the transfer figures.
- `status_code`.
- `interrupt`: the cancellation flag.

It has these methods:

- `reset()`
- `increment_step(n)`
- `finish()`, which sets the step count to `max`.
- `finished()`

`get_progress()` returns the instance shared by the whole process.

### `sdupdater.fsutil`

- `split_string(text, delimiter)`
- `remove_dir(path)` removes a directory recursively and returns whether that
  succeeded.
- `parse_json_file(path)` returns `{}` when the file is missing or holds
  invalid JSON.
- `write_json_to_file(data, path)` writes JSON with an indent of four.
- `copy_file(source, destination)` returns whether the copy was made.
- `copy_files(path)` carries out the copies listed in a file, one per line, in
  the form `source|destination`. It returns the list of sources that were
  missing or had no destination.
- `create_tree(path)` creates the directories up to the last `/` in the path.
- `read_line_by_line(path)` returns the set of non-empty lines, with any
  trailing CR removed.
- `free_storage(path)`

### `sdupdater.utils`

- `is_archive(path)` checks for the zip signature.
- `format_list_item_title(text, max_score=140)` shortens the text with an
  ellipsis.
- `format_application_id(id)` returns sixteen upper-case hex digits.
- `get_error_message(status_code)`
- `read_file(path)` returns the first word of the file.
- `save_to_file(text, path)`
- `fetch_payloads(root="/")` returns the `.bin` payloads found in the usual
  payload directories.
- `remove_sysmodules_flags(directory)` deletes the `boot2.flag` files.
- `get_contents_path(cfw)`
- `get_bool_value(data, key)` raises `TypeError` if the stored value is not a
  boolean.
- `get_value_from_key(data, key)`
- `get_app_path(argv=None)`
- `existing_cheats_tids(contents_path)`

### `sdupdater.extract`

- `extract(archive_path, working_path="/", preserve_inis=False, ...)` unpacks
  an archive. Entries in the ignore list, and `.ini` files when
  `preserve_inis` is set, are written only if they are absent. The running
  application is never overwritten. Files that are in use are staged as
  `*.aio`. Hekate payloads are also copied to `update.bin`, and to the reboot
  payload location when the optional `confirm_reboot_payload` callback
  approves.
- `extract_cheats(archive_path, titles, cfw, version, root="/",
  extract_all=False, progress=None)` installs the cheat folders of the given
  titles.
- `extract_all_cheats(...)` installs the cheats of every title in the archive.
- `exclude_titles(path, listed_titles)` and `write_titles_to_file(titles,
  path)` manage the exclusion list.
- `remove_cheats(contents_path, ...)`, `remove_orphaned_cheats(contents_path,
  installed_titles, ...)` and `remove_cheats_directory(entry)` remove
  installed cheats.
- `is_bid(bid)`
- `uncompressed_size(archive_path)` and `ensure_available_storage(archive_path,
  free_bytes)` check free space. Extraction needs the archive's uncompressed
  size plus 10% to be free, and raises `InsufficientStorageError` when it is
  not.

### `sdupdater.netprofile`

`NetworkSettings` is a frozen dataclass of IPv4 and DNS settings. It has a
`connected` property.

- `default_profiles(saved=None, rng=None)` returns the saved profiles followed
  by the built-in presets.
- `apply_profile(settings, values)` returns new settings with the profile
  applied.
- `describe(settings, local_ip)` returns a text summary.
- `profile_name(values)`
- `ip_to_string(ip)` and `string_to_ip(text)`

### `sdupdater.progress_text`

`format_label_text(speed, current, total)` renders the sizes and speed in MiB.
While data is flowing it also renders the time left.

### `sdupdater.tabs`

- `load_hide_status(path)` and `save_hide_status(status, path)` read and write
  the hidden-entry settings for the keys in `HIDE_KEYS`.
- `visible_main_tabs(hide_status)`
- `visible_tools(hide_status, erista=True, tag="", app_version=APP_VERSION)`
- `available_languages(romfs_root)` returns the entries of `LANGUAGES` whose
  translation file exists.

## Example

```python
from sdupdater.constants import Cfw
from sdupdater.extract import extract_cheats
from sdupdater.progress import ProgressEvent

progress = ProgressEvent()
extract_cheats("cheats.zip", ["0100000000010000"], Cfw.AMS, "v1",
               root="/mnt/sd", progress=progress)
print(progress.finished())
```

## What it does not do

The package has no user interface and no command-line entry point. It does
not download anything itself. Archives, version tags and link lists must be
fetched by the caller.

It does not talk to the console's system services. Installed titles, network
settings and free space are passed in, or read from the local file system.
Likewise, it does not reboot, inject payloads or write network profiles to
the device.