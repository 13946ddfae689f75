"""Network profile presets, their application to settings, and a text summary."""

from __future__ import annotations

import ipaddress
import random
import re
from dataclasses import dataclass, replace
from typing import Any, Mapping, Sequence

Address = tuple[int, int, int, int]

NOT_CONNECTED_TEXT = "Please connect to internet to use this feature."
UNNAMED_PROFILE = "Unnamed"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class NetworkSettings:
    """The IPv4 and DNS settings of the current network profile."""

    uuid: bytes = bytes(16)
    ip_auto: bool = True
    ip_address: Address = (0, 0, 0, 0)
    subnet_mask: Address = (0, 0, 0, 0)
    gateway: Address = (0, 0, 0, 0)
    dns_auto: bool = True
    primary_dns: Address = (0, 0, 0, 0)
    secondary_dns: Address = (0, 0, 0, 0)
    mtu: int = 0

    @property
    def connected(self) -> bool:
        """Whether a profile is in use: it has an identifier and an MTU."""
        return any(self.uuid) and self.mtu != 0


def ip_to_string(ip: Sequence[int]) -> str:
    """Return the dotted-quad text of a four-byte address."""
    if len(ip) != 4:
        raise ValueError(f"an IPv4 address has 4 bytes, got {len(ip)}")
    return ".".join(str(part & 0xFF) for part in ip)


def string_to_ip(ip: str) -> Address:
    """Parse dotted text into four bytes; each field keeps its low eight bits.

    Raises ValueError if a field does not start with a number or if there
    are not exactly four fields.
    """
    fields = [field for field in ip.split(".") if field]
    if len(fields) != 4:
        raise ValueError(f"expected 4 address fields in {ip!r}")
    result = []
    for field in fields:
        match = _LEADING_INT.match(field)
        if match is None:
            raise ValueError(f"invalid address field {field!r} in {ip!r}")
        result.append(int(match.group(1)) & 0xFF)
    return (result[0], result[1], result[2], result[3])


def default_profiles(saved: Any = None, rng: random.Random | None = None) -> list[dict[str, Any]]:
    """Return the saved profiles followed by the built-in presets.

    saved is the parsed content of the profiles file: a list, or an empty
    document. A non-empty object cannot be extended and raises TypeError.
    """
    if rng is None:
        rng = random.Random()
    if not saved:
        profiles: list[dict[str, Any]] = []
    elif isinstance(saved, list):
        profiles = list(saved)
    else:
        raise TypeError("saved profiles must be a list")

    profiles.extend(
        [
            {
                "name": "lan-play",
                "ip_addr": f"10.13.{rng.randrange(256)}.{rng.randrange(253) + 2}",
                "subnet_mask": "255.255.0.0",
                "gateway": "10.13.37.1",
            },
            {"name": "Automatic IP Address", "ip_auto": True},
            {"name": "Automatic DNS", "dns_auto": True},
            {"name": "90DNS (Europe)", "dns1": "163.172.141.219", "dns2": "207.246.121.77"},
            {"name": "90DNS (USA)", "dns1": "207.246.121.77", "dns2": "163.172.141.219"},
            {"name": "Google DNS", "dns1": "8.8.8.8", "dns2": "8.8.4.4"},
            {"name": "ACNH mtu", "mtu": 1500},
        ]
    )
    return profiles


def profile_name(values: Mapping[str, Any]) -> str:
    """Return the display name of a profile."""
    return str(values["name"]) if "name" in values else UNNAMED_PROFILE


def _valid_ipv4(values: Mapping[str, Any], key: str) -> Address | None:
    if key not in values:
        return None
    text = values[key]
    if not isinstance(text, str):
        raise TypeError(f"value of {key!r} must be a string")
    try:
        ipaddress.IPv4Address(text)
    except ValueError:
        return None
    return string_to_ip(text)


def _as_bool(values: Mapping[str, Any], key: str) -> bool:
    value = values[key]
    if not isinstance(value, (bool, int, float)):
        raise TypeError(f"value of {key!r} must be a boolean")
    return bool(value)


def apply_profile(settings: NetworkSettings, values: Mapping[str, Any]) -> NetworkSettings:
    """Return settings with the fields named in the profile values applied.

    Addresses that are not valid IPv4 text are ignored.
    """
    changes: dict[str, Any] = {}

    address = _valid_ipv4(values, "ip_addr")
    if address is not None:
        changes["ip_auto"] = False
        changes["ip_address"] = address
    address = _valid_ipv4(values, "subnet_mask")
    if address is not None:
        changes["subnet_mask"] = address
    address = _valid_ipv4(values, "gateway")
    if address is not None:
        changes["gateway"] = address
    address = _valid_ipv4(values, "dns1")
    if address is not None:
        changes["dns_auto"] = False
        changes["primary_dns"] = address
    address = _valid_ipv4(values, "dns2")
    if address is not None:
        changes["dns_auto"] = False
        changes["secondary_dns"] = address
    if "mtu" in values:
        mtu = values["mtu"]
        if isinstance(mtu, bool) or not isinstance(mtu, (int, float)):
            raise TypeError("value of 'mtu' must be a number")
        changes["mtu"] = int(mtu) & 0xFFFF
    if "ip_auto" in values:
        changes["ip_auto"] = _as_bool(values, "ip_auto")
    if "dns_auto" in values:
        changes["dns_auto"] = _as_bool(values, "dns_auto")

    return replace(settings, **changes)


def describe(settings: NetworkSettings, local_ip: str) -> str:
    """Return a multi-line summary of the settings, or a hint to connect first."""
    if not settings.connected:
        return NOT_CONNECTED_TEXT
    if settings.ip_auto:
        text = "IP Adress: Automatic"
    else:
        text = (
            f"IP Adress: {ip_to_string(settings.ip_address)}\n"
            f"Subnet Mask: {ip_to_string(settings.subnet_mask)}\n"
            f"Gateway: {ip_to_string(settings.gateway)}"
        )
    text = f"{text}\nLocal IP addr: {local_ip}\nMTU: {settings.mtu}"
    if settings.dns_auto:
        text = f"{text}\nDNS: Automatic"
    else:
        text = (
            f"{text}\nPrimary DNS: {ip_to_string(settings.primary_dns)}"
            f"\nSecondary DNS: {ip_to_string(settings.secondary_dns)}"
        )
    return text