"""Emulated device identity and its JSON file form."""

from __future__ import annotations

import binascii
import hashlib
import json
import secrets
from dataclasses import dataclass, field
from typing import Any

from qqcore.auth import ProtocolType

_UINT32_MAX = 0xFFFFFFFF


@dataclass
class OSVersion:
    """Operating-system version reported by the device."""

    incremental: bytes = b""
    release: bytes = b""
    codename: bytes = b""
    sdk: int = 0


def _text(value: bytes) -> str:
    return value.decode("utf-8", "replace")


def _json_str(obj: dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"failed to unmarshal json message: {key} must be a string")
    return value


def _json_int(obj: dict[str, Any], key: str, *, unsigned: bool = False) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"failed to unmarshal json message: {key} must be an integer")
    if unsigned and not 0 <= value <= _UINT32_MAX:
        raise ValueError(f"failed to unmarshal json message: {key} must be a uint32")
    return value


def _load_object(data: str | bytes) -> dict[str, Any]:
    try:
        doc = json.loads(data)
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal json message: {exc}") from exc
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ValueError("failed to unmarshal json message: expected an object")
    return doc


@dataclass
class Device:
    """Hardware and software identity presented to the server."""

    display: bytes = b""
    product: bytes = b""
    device: bytes = b""
    board: bytes = b""
    brand: bytes = b""
    model: bytes = b""
    bootloader: bytes = b""
    finger_print: bytes = b""
    boot_id: bytes = b""
    proc_version: bytes = b""
    base_band: bytes = b""
    sim_info: bytes = b""
    os_type: bytes = b""
    mac_address: bytes = b""
    ip_address: bytes = b""
    wifi_bssid: bytes = b""
    wifi_ssid: bytes = b""
    imsi_md5: bytes = b""
    imei: str = ""
    android_id: bytes = b""
    apn: bytes = b""
    vendor_name: bytes = b""
    vendor_os_name: bytes = b""
    guid: bytes = b""
    tgtgt_key: bytes = b""
    qimei16: str = ""
    qimei36: str = ""
    protocol: ProtocolType = ProtocolType.UNSET
    version: OSVersion = field(default_factory=OSVersion)

    def to_json(self) -> bytes:
        """Serialise the device to its JSON file form."""
        if len(self.ip_address) < 4:
            raise ValueError("device ip address must have 4 bytes")
        doc = {
            "display": _text(self.display),
            "product": _text(self.product),
            "device": _text(self.device),
            "board": _text(self.board),
            "model": _text(self.model),
            "finger_print": _text(self.finger_print),
            "boot_id": _text(self.boot_id),
            "proc_version": _text(self.proc_version),
            "protocol": int(self.protocol),
            "imei": self.imei,
            "brand": _text(self.brand),
            "bootloader": _text(self.bootloader),
            "base_band": _text(self.base_band),
            "version": {
                "incremental": _text(self.version.incremental),
                "release": _text(self.version.release),
                "codename": _text(self.version.codename),
                "sdk": self.version.sdk,
            },
            "sim_info": _text(self.sim_info),
            "os_type": _text(self.os_type),
            "mac_address": _text(self.mac_address),
            "ip_address": list(self.ip_address[:4]),
            "wifi_bssid": _text(self.wifi_bssid),
            "wifi_ssid": _text(self.wifi_ssid),
            "imsi_md5": self.imsi_md5.hex(),
            "android_id": _text(self.android_id),
            "apn": _text(self.apn),
            "vendor_name": _text(self.vendor_name),
            "vendor_os_name": _text(self.vendor_os_name),
        }
        return json.dumps(doc, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    def read_json(self, data: str | bytes) -> None:
        """Load fields from the JSON file form, then derive guid and tgtgt key."""
        doc = _load_object(data)
        version_doc = doc.get("version")
        if not isinstance(version_doc, dict):
            raise ValueError("device json has no version object")

        def take(attr: str, key: str) -> None:
            value = _json_str(doc, key)
            if value:
                setattr(self, attr, value.encode("utf-8"))

        take("display", "display")
        take("product", "product")
        take("device", "device")
        take("board", "board")
        take("brand", "brand")
        take("model", "model")
        take("bootloader", "bootloader")
        take("finger_print", "finger_print")
        take("boot_id", "boot_id")
        take("proc_version", "proc_version")
        take("base_band", "base_band")
        take("sim_info", "sim_info")
        take("os_type", "os_type")
        take("mac_address", "mac_address")

        ip_doc = doc.get("ip_address") or []
        if not isinstance(ip_doc, list) or not all(
            isinstance(part, int) and not isinstance(part, bool) for part in ip_doc
        ):
            raise ValueError("failed to unmarshal json message: ip_address must be a list of integers")
        if len(ip_doc) == 4:
            self.ip_address = bytes(part & 0xFF for part in ip_doc)

        take("wifi_bssid", "wifi_bssid")
        take("wifi_ssid", "wifi_ssid")

        imsi = _json_str(doc, "imsi_md5")
        if imsi:
            try:
                self.imsi_md5 = binascii.unhexlify(imsi)
            except (binascii.Error, ValueError):
                pass

        imei = _json_str(doc, "imei")
        if imei:
            self.imei = imei

        take("apn", "apn")
        take("vendor_name", "vendor_name")
        take("vendor_os_name", "vendor_os_name")

        take("android_id", "android_id")
        if not _json_str(doc, "android_id"):
            self.android_id = self.display

        protocol = _json_int(doc, "protocol")
        if 1 <= protocol <= 6:
            self.protocol = ProtocolType(protocol)
        else:
            self.protocol = ProtocolType.ANDROID_PAD

        self.version = OSVersion(
            incremental=_json_str(version_doc, "incremental").encode("utf-8"),
            release=_json_str(version_doc, "release").encode("utf-8"),
            codename=_json_str(version_doc, "codename").encode("utf-8"),
            sdk=_json_int(version_doc, "sdk", unsigned=True),
        )

        self.gen_new_guid()
        self.gen_new_tgtgt_key()

    def gen_new_guid(self) -> None:
        """Derive the guid from the android id and MAC address."""
        self.guid = hashlib.md5(self.android_id + self.mac_address).digest()

    def gen_new_tgtgt_key(self) -> None:
        """Generate a fresh random tgtgt key bound to the guid."""
        digest = hashlib.md5()
        digest.update(secrets.token_bytes(16))
        digest.update(self.guid)
        self.tgtgt_key = digest.digest()