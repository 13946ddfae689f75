import pytest

from sdupdater.constants import (
    AMS_FILENAME,
    APP_FILENAME,
    BOOTLOADER_FILENAME,
    CHEATS_FILENAME,
    CUSTOM_FILENAME,
    FIRMWARE_FILENAME,
    ContentType,
    archive_filename,
    content_type_name,
)


@pytest.mark.parametrize(
    "content_type, name",
    [
        (ContentType.CUSTOM, "custom"),
        (ContentType.CHEATS, "cheats"),
        (ContentType.FW, "firmwares"),
        (ContentType.APP, "app"),
        (ContentType.BOOTLOADERS, "bootloaders"),
        (ContentType.AMS_CFW, "cfws"),
        (ContentType.PAYLOADS, "payloads"),
        (ContentType.HEKATE_IPL, "hekate_ipl"),
    ],
)
def test_content_type_name(content_type, name):
    assert content_type_name(content_type) == name


@pytest.mark.parametrize(
    "content_type, filename",
    [
        (ContentType.CUSTOM, CUSTOM_FILENAME),
        (ContentType.CHEATS, CHEATS_FILENAME),
        (ContentType.FW, FIRMWARE_FILENAME),
        (ContentType.APP, APP_FILENAME),
        (ContentType.BOOTLOADERS, BOOTLOADER_FILENAME),
        (ContentType.AMS_CFW, AMS_FILENAME),
    ],
)
def test_archive_filename(content_type, filename):
    assert archive_filename(content_type) == filename


@pytest.mark.parametrize("content_type", [ContentType.PAYLOADS, ContentType.HEKATE_IPL])
def test_archive_filename_none_for_plain_downloads(content_type):
    assert archive_filename(content_type) is None


def test_archive_filenames_distinct_zips():
    names = [archive_filename(t) for t in ContentType if archive_filename(t)]
    assert len(set(names)) == len(names)
    assert all(n.endswith(".zip") for n in names)


def test_content_type_names_distinct():
    names = [content_type_name(t) for t in ContentType]
    assert len(names) == 8
    assert len(set(names)) == len(names)