"""Paths, content kinds and firmware flavours used throughout the updater."""

from __future__ import annotations

from enum import Enum

APP_NAME = "sdupdater"

ROOT_PATH = "/"
APP_PATH = f"/switch/{APP_NAME}/"
NRO_PATH = f"/switch/{APP_NAME}/{APP_NAME}.nro"
NRO_PATH_REGEX = rf".*(/switch/.*{APP_NAME}.nro).*"
DOWNLOAD_PATH = f"/config/{APP_NAME}/"
CONFIG_PATH = f"/config/{APP_NAME}/"
CONFIG_FILE = f"/config/{APP_NAME}/config.json"

MARIKO_PAYLOAD_PATH = "/payload.bin"
MARIKO_PAYLOAD_PATH_TEMP = "/payload.bin.aio"

APP_FILENAME = f"{CONFIG_PATH}app.zip"
CUSTOM_FILENAME = f"{CONFIG_PATH}custom.zip"
HEKATE_IPL_PATH = "/bootloader/hekate_ipl.ini"
FIRMWARE_FILENAME = f"{CONFIG_PATH}firmware.zip"
FIRMWARE_PATH = "/firmware/"
BOOTLOADER_FILENAME = f"{CONFIG_PATH}bootloader.zip"
AMS_FILENAME = f"{CONFIG_PATH}ams.zip"
DEEPSEA_PACKAGE_PATH = "/config/deepsea/customPackage.json"
CUSTOM_PACKS_PATH = f"{CONFIG_PATH}custom_packs.json"

TOKEN_PATH = f"{CONFIG_PATH}token.json"
CHEATS_FILENAME = f"{CONFIG_PATH}cheats.zip"
CHEATS_EXCLUDE = f"{CONFIG_PATH}exclude.txt"
FILES_IGNORE = f"{CONFIG_PATH}preserve.txt"
INTERNET_JSON = f"{CONFIG_PATH}internet.json"
UPDATED_TITLES_PATH = f"{CONFIG_PATH}updated.dat"
CHEATS_VERSION = f"{CONFIG_PATH}cheats_version.dat"
AMS_CONTENTS = "/atmosphere/contents/"
REINX_CONTENTS = "/ReiNX/contents/"
SXOS_TITLES = "/sxos/titles/"
AMS_PATH = "/atmosphere/"
SXOS_PATH = "/sxos/"
REINX_PATH = "/ReiNX/"
CONTENTS_PATH = "contents/"
TITLES_PATH = "titles/"

JC_COLOR_PATH = f"{CONFIG_PATH}jc_profiles.json"
PC_COLOR_PATH = f"{CONFIG_PATH}pc_profiles.json"

PAYLOAD_PATH = "/payloads/"
BOOTLOADER_PATH = "/bootloader/"
BOOTLOADER_PL_PATH = "/bootloader/payloads/"
UPDATE_BIN_PATH = "/bootloader/update.bin"
REBOOT_PAYLOAD_PATH = "/atmosphere/reboot_payload.bin"
FUSEE_SECONDARY = "/atmosphere/fusee-secondary.bin"
FUSEE_MTC = "/atmosphere/fusee-mtc.bin"

AMS_DIRECTORY_PATH = f"{CONFIG_PATH}atmosphere/"
SEPT_DIRECTORY_PATH = f"{CONFIG_PATH}sept/"
FW_DIRECTORY_PATH = "/firmware/"

HIDE_TABS_JSON = f"{CONFIG_PATH}hide_tabs.json"
COPY_FILES_TXT = f"{CONFIG_PATH}copy_files.txt"
LANGUAGE_JSON = f"{CONFIG_PATH}language.json"

ROMFS_PATH = "romfs:/"
ROMFS_FORWARDER = "romfs:/forwarder.nro"
FORWARDER_PATH = f"{CONFIG_PATH}forwarder.nro"

DAYBREAK_PATH = "/switch/daybreak.nro"

HIDDEN_APP_FILE = f"{CONFIG_PATH}.{APP_NAME}"

LOCALISATION_FILE = "romfs:/i18n/{}/menus.json"

LISTITEM_HEIGHT = 50


class ContentType(Enum):
    """Kinds of content the updater can download."""

    CUSTOM = "custom"
    CHEATS = "cheats"
    FW = "firmwares"
    APP = "app"
    BOOTLOADERS = "bootloaders"
    AMS_CFW = "cfws"
    PAYLOADS = "payloads"
    HEKATE_IPL = "hekate_ipl"


class Cfw(Enum):
    """Custom firmware flavours."""

    RNX = "rnx"
    SXOS = "sxos"
    AMS = "ams"


_ARCHIVE_FILENAMES = {
    ContentType.CUSTOM: CUSTOM_FILENAME,
    ContentType.CHEATS: CHEATS_FILENAME,
    ContentType.FW: FIRMWARE_FILENAME,
    ContentType.APP: APP_FILENAME,
    ContentType.BOOTLOADERS: BOOTLOADER_FILENAME,
    ContentType.AMS_CFW: AMS_FILENAME,
}


def archive_filename(content_type: ContentType) -> str | None:
    """Return where the archive of this content is downloaded, or None if it has none."""
    return _ARCHIVE_FILENAMES.get(content_type)


def content_type_name(content_type: ContentType) -> str:
    """Return the key naming this content in the links document."""
    return content_type.value