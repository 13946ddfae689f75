import zipfile

import pytest

from sdupdater.constants import CHEATS_VERSION, REBOOT_PAYLOAD_PATH, UPDATE_BIN_PATH, Cfw
from sdupdater.extract import (
    InsufficientStorageError,
    ensure_available_storage,
    exclude_titles,
    extract,
    extract_all_cheats,
    extract_cheats,
    is_bid,
    remove_cheats,
    remove_cheats_directory,
    remove_orphaned_cheats,
    uncompressed_size,
    write_titles_to_file,
)
from sdupdater.progress import ProgressEvent

TID_A = "01006F8002326000"
TID_B = "0100000000001000"


def make_zip(path, entries):
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            if data is None:
                archive.writestr(zipfile.ZipInfo(name), b"")
            else:
                archive.writestr(name, data)
    return path


@pytest.fixture
def sd(tmp_path):
    root = tmp_path / "sd"
    root.mkdir()
    return root


def test_uncompressed_size_and_storage_check(tmp_path):
    archive = make_zip(tmp_path / "a.zip", {"one.txt": b"12345", "two.txt": b"abc"})
    size = uncompressed_size(archive)
    assert size == len(b"12345") + len(b"abc")
    assert ensure_available_storage(archive, 10**12) == size
    assert ensure_available_storage(archive, None) == size
    with pytest.raises(InsufficientStorageError) as info:
        ensure_available_storage(archive, size)
    assert info.value.required == size


def test_extract_writes_entries_and_skips_app(tmp_path, sd):
    archive = make_zip(
        tmp_path / "a.zip",
        {"atmosphere/": None, "atmosphere/config/a.txt": b"hello", "switch/app.nro": b"new"},
    )
    working = str(sd) + "/"
    progress = ProgressEvent()
    extract(archive, working, ignore_list=[], app_path=working + "switch/app.nro", progress=progress)
    assert (sd / "atmosphere/config/a.txt").read_bytes() == b"hello"
    assert not (sd / "switch/app.nro").exists()
    assert progress.max == 3
    assert progress.finished()


def test_extract_preserves_inis_and_ignored(tmp_path, sd):
    (sd / "bootloader").mkdir()
    (sd / "bootloader/hekate_ipl.ini").write_text("old")
    (sd / "keep").mkdir()
    (sd / "keep/file.txt").write_text("old")
    archive = make_zip(
        tmp_path / "a.zip",
        {
            "bootloader/hekate_ipl.ini": b"new",
            "bootloader/other.ini": b"fresh",
            "keep/file.txt": b"new",
            "plain.txt": b"new",
        },
    )
    working = str(sd) + "/"
    progress = ProgressEvent()
    extract(archive, working, preserve_inis=True, ignore_list=["keep/"], app_path="", progress=progress)
    assert progress.max == 4
    assert progress.finished()
    assert (sd / "bootloader/hekate_ipl.ini").read_text() == "old"
    assert (sd / "bootloader/other.ini").read_text() == "fresh"
    assert (sd / "keep/file.txt").read_text() == "old"
    assert (sd / "plain.txt").read_text() == "new"


def test_extract_overwrites_inis_without_preserve(tmp_path, sd):
    (sd / "x.ini").write_text("old")
    archive = make_zip(tmp_path / "a.zip", {"x.ini": b"new"})
    extract(archive, str(sd) + "/", ignore_list=[], app_path="", progress=ProgressEvent())
    assert (sd / "x.ini").read_text() == "new"


def test_extract_stages_package3(tmp_path, sd):
    archive = make_zip(tmp_path / "a.zip", {"atmosphere/package3": b"pkg"})
    extract(archive, str(sd) + "/", ignore_list=[], app_path="", progress=ProgressEvent())
    assert (sd / "atmosphere/package3.aio").read_bytes() == b"pkg"
    assert not (sd / "atmosphere/package3").exists()


def test_extract_hekate_copies_payloads(tmp_path, sd):
    (sd / "bootloader").mkdir()
    (sd / "atmosphere").mkdir()
    archive = make_zip(tmp_path / "a.zip", {"hekate_ctcaer_6.bin": b"payload"})
    asked = []

    def confirm(source, destination):
        asked.append((source, destination))
        return True

    working = str(sd) + "/"
    extract(archive, working, ignore_list=[], app_path="", progress=ProgressEvent(), confirm_reboot_payload=confirm)
    update_bin = sd / UPDATE_BIN_PATH.lstrip("/")
    reboot = sd / REBOOT_PAYLOAD_PATH.lstrip("/")
    assert update_bin.read_bytes() == b"payload"
    assert reboot.read_bytes() == b"payload"
    assert asked == [(str(update_bin), str(reboot))]


def test_extract_hekate_without_confirmation(tmp_path, sd):
    (sd / "bootloader").mkdir()
    archive = make_zip(tmp_path / "a.zip", {"hekate_ctcaer_6.bin": b"payload"})
    extract(archive, str(sd) + "/", ignore_list=[], app_path="", progress=ProgressEvent())
    assert (sd / UPDATE_BIN_PATH.lstrip("/")).read_bytes() == b"payload"
    assert not (sd / REBOOT_PAYLOAD_PATH.lstrip("/")).exists()


def test_extract_interrupted(tmp_path, sd):
    archive = make_zip(tmp_path / "a.zip", {"a.txt": b"a", "b.txt": b"b"})
    progress = ProgressEvent(interrupt=True)
    extract(archive, str(sd) + "/", ignore_list=[], app_path="", progress=progress)
    assert list(sd.iterdir()) == []
    assert progress.finished()


def test_exclude_titles(tmp_path):
    exclude = tmp_path / "exclude.txt"
    exclude.write_text(TID_A.lower() + "\nFFFFFFFFFFFFFFFF\n")
    listed = [TID_B, TID_A]
    assert exclude_titles(exclude, listed) == [TID_B]
    assert exclude_titles(tmp_path / "missing.txt", listed) == listed


def test_write_titles_to_file_round_trip(tmp_path):
    path = tmp_path / "titles.dat"
    write_titles_to_file({TID_A, TID_B}, path)
    lines = path.read_text().splitlines()
    assert lines == sorted([TID_A, TID_B])
    assert exclude_titles(path, [TID_A, TID_B]) == []


def cheats_zip(tmp_path, prefix):
    return make_zip(
        tmp_path / "cheats.zip",
        {
            f"{prefix}{TID_A.lower()}/cheats/ABCDEF0123456789.txt": b"[a]",
            f"{prefix}{TID_B}/cheats/1122334455667788.txt": b"[b]",
            f"{prefix}{TID_A}/exefs/main": b"no",
        },
    )


def test_extract_cheats_selected_titles(tmp_path, sd):
    archive = cheats_zip(tmp_path, "contents/")
    progress = ProgressEvent()
    extract_cheats(archive, [TID_A], Cfw.AMS, "v42", root=sd, progress=progress)
    contents = sd / "atmosphere/contents"
    assert (contents / TID_A.lower() / "cheats/ABCDEF0123456789.txt").read_bytes() == b"[a]"
    assert not (contents / TID_B).exists()
    assert not (contents / TID_A / "exefs").exists()
    assert (sd / CHEATS_VERSION.lstrip("/")).read_text() == "v42\n"
    assert progress.finished()


def test_extract_all_cheats_sxos_offline(tmp_path, sd):
    archive = cheats_zip(tmp_path, "titles/")
    extract_all_cheats(archive, Cfw.SXOS, "offline", root=sd, progress=ProgressEvent())
    titles = sd / "sxos/titles"
    assert (titles / TID_B / "cheats/1122334455667788.txt").read_bytes() == b"[b]"
    assert (titles / TID_A.lower() / "cheats/ABCDEF0123456789.txt").exists()
    assert not (sd / CHEATS_VERSION.lstrip("/")).exists()


def make_title(contents, tid, with_cheats=True, extra=False):
    title = contents / tid
    title.mkdir(parents=True)
    if with_cheats:
        (title / "cheats").mkdir()
        (title / "cheats" / "x.txt").write_text("[x]")
    if extra:
        (title / "exefs").mkdir()
    return title


def test_remove_cheats_directory(tmp_path):
    only_cheats = make_title(tmp_path, TID_A)
    with_extra = make_title(tmp_path, TID_B, extra=True)
    assert remove_cheats_directory(only_cheats) is True
    assert not only_cheats.exists()
    assert remove_cheats_directory(with_extra) is True
    assert with_extra.exists()
    assert not (with_extra / "cheats").exists()


def test_remove_cheats(tmp_path):
    contents = tmp_path / "contents"
    make_title(contents, TID_A)
    make_title(contents, TID_B, extra=True)
    version = tmp_path / "version.dat"
    version.write_text("v1\n")
    progress = ProgressEvent()
    remove_cheats(contents, version, progress)
    assert [entry.name for entry in contents.iterdir()] == [TID_B]
    assert not (contents / TID_B / "cheats").exists()
    assert not version.exists()
    assert progress.max == 3
    assert progress.finished()


def test_remove_orphaned_cheats(tmp_path):
    contents = tmp_path / "contents"
    make_title(contents, TID_A)
    make_title(contents, TID_B)
    version = tmp_path / "version.dat"
    version.write_text("v1\n")
    remove_orphaned_cheats(contents, [TID_A.lower()], version, ProgressEvent())
    assert (contents / TID_A / "cheats" / "x.txt").exists()
    assert not (contents / TID_B).exists()
    assert not version.exists()


@pytest.mark.parametrize(
    "bid, expected",
    [("ABCDEF0123456789", True), ("abcdef", True), ("", True), ("XYZ", False), ("12 34", False)],
)
def test_is_bid(bid, expected):
    assert is_bid(bid) is expected