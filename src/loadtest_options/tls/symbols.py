"""
loadtest-options — TLS symbol tables

File: src/loadtest_options/tls/symbols.py
Last updated: 2026-10-18

Purpose
- Bidirectional lookup between symbolic TLS names and negotiated numeric codes.

What should be included in this file
- ``ProtocolVersion`` enum carrying the record-layer version codes.
- Read-only name -> code tables for versions and cipher suites, plus reverse tables.

Functional requirements
- ``version_to_name`` is total over ``ProtocolVersion``; unspecified maps to ``""``.
- Names and codes are unique in each table so every mapping round-trips.

Non-functional requirements
- Tables are built once at import time and never mutated.
"""

from __future__ import annotations

import ssl
from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType
from typing import Final


class ProtocolVersion(IntEnum):
    """TLS/SSL protocol revision; ``UNSPECIFIED`` means any."""

    UNSPECIFIED = 0
    SSL_3_0 = 0x0300
    TLS_1_0 = 0x0301
    TLS_1_1 = 0x0302
    TLS_1_2 = 0x0303
    TLS_1_3 = 0x0304

    @property
    def symbol(self) -> str:
        return version_to_name(self)

    @property
    def ssl_version(self) -> ssl.TLSVersion:
        if self is ProtocolVersion.UNSPECIFIED:
            return ssl.TLSVersion.MINIMUM_SUPPORTED
        return _SSL_VERSIONS[self]


SUPPORTED_VERSIONS: Final[Mapping[str, ProtocolVersion]] = MappingProxyType(
    {
        "ssl3.0": ProtocolVersion.SSL_3_0,
        "tls1.0": ProtocolVersion.TLS_1_0,
        "tls1.1": ProtocolVersion.TLS_1_1,
        "tls1.2": ProtocolVersion.TLS_1_2,
        "tls1.3": ProtocolVersion.TLS_1_3,
    }
)

VERSION_NAMES: Final[Mapping[ProtocolVersion, str]] = MappingProxyType(
    {
        ProtocolVersion.UNSPECIFIED: "",
        **{version: name for name, version in SUPPORTED_VERSIONS.items()},
    }
)

_SSL_VERSIONS: Final[Mapping[ProtocolVersion, ssl.TLSVersion]] = MappingProxyType(
    {
        ProtocolVersion.SSL_3_0: ssl.TLSVersion.SSLv3,
        ProtocolVersion.TLS_1_0: ssl.TLSVersion.TLSv1,
        ProtocolVersion.TLS_1_1: ssl.TLSVersion.TLSv1_1,
        ProtocolVersion.TLS_1_2: ssl.TLSVersion.TLSv1_2,
        ProtocolVersion.TLS_1_3: ssl.TLSVersion.TLSv1_3,
    }
)

# IANA registry names and code points.
SUPPORTED_CIPHER_SUITES: Final[Mapping[str, int]] = MappingProxyType(
    {
        "TLS_RSA_WITH_RC4_128_SHA": 0x0005,
        "TLS_RSA_WITH_3DES_EDE_CBC_SHA": 0x000A,
        "TLS_RSA_WITH_AES_128_CBC_SHA": 0x002F,
        "TLS_RSA_WITH_AES_256_CBC_SHA": 0x0035,
        "TLS_RSA_WITH_AES_128_CBC_SHA256": 0x003C,
        "TLS_RSA_WITH_AES_128_GCM_SHA256": 0x009C,
        "TLS_RSA_WITH_AES_256_GCM_SHA384": 0x009D,
        "TLS_ECDHE_ECDSA_WITH_RC4_128_SHA": 0xC007,
        "TLS_ECDHE_ECDSA_WITH_AES_128_CBC_SHA": 0xC009,
        "TLS_ECDHE_ECDSA_WITH_AES_256_CBC_SHA": 0xC00A,
        "TLS_ECDHE_RSA_WITH_RC4_128_SHA": 0xC011,
        "TLS_ECDHE_RSA_WITH_3DES_EDE_CBC_SHA": 0xC012,
        "TLS_ECDHE_RSA_WITH_AES_128_CBC_SHA": 0xC013,
        "TLS_ECDHE_RSA_WITH_AES_256_CBC_SHA": 0xC014,
        "TLS_ECDHE_ECDSA_WITH_AES_128_CBC_SHA256": 0xC023,
        "TLS_ECDHE_RSA_WITH_AES_128_CBC_SHA256": 0xC027,
        "TLS_ECDHE_ECDSA_WITH_AES_128_GCM_SHA256": 0xC02B,
        "TLS_ECDHE_ECDSA_WITH_AES_256_GCM_SHA384": 0xC02C,
        "TLS_ECDHE_RSA_WITH_AES_128_GCM_SHA256": 0xC02F,
        "TLS_ECDHE_RSA_WITH_AES_256_GCM_SHA384": 0xC030,
        "TLS_ECDHE_RSA_WITH_CHACHA20_POLY1305_SHA256": 0xCCA8,
        "TLS_ECDHE_ECDSA_WITH_CHACHA20_POLY1305_SHA256": 0xCCA9,
        "TLS_AES_128_GCM_SHA256": 0x1301,
        "TLS_AES_256_GCM_SHA384": 0x1302,
        "TLS_CHACHA20_POLY1305_SHA256": 0x1303,
    }
)

CIPHER_SUITE_NAMES: Final[Mapping[int, str]] = MappingProxyType(
    {code: name for name, code in SUPPORTED_CIPHER_SUITES.items()}
)


def name_to_version(name: str) -> ProtocolVersion | None:
    """Return the version for ``name``; ``""`` is unspecified, unknown is ``None``."""

    if name == "":
        return ProtocolVersion.UNSPECIFIED
    return SUPPORTED_VERSIONS.get(name)


def version_to_name(version: ProtocolVersion) -> str:
    return VERSION_NAMES[ProtocolVersion(version)]


def name_to_cipher_code(name: str) -> int | None:
    return SUPPORTED_CIPHER_SUITES.get(name)


def cipher_code_to_name(code: int) -> str | None:
    return CIPHER_SUITE_NAMES.get(code)


__all__ = [
    "CIPHER_SUITE_NAMES",
    "SUPPORTED_CIPHER_SUITES",
    "SUPPORTED_VERSIONS",
    "VERSION_NAMES",
    "ProtocolVersion",
    "cipher_code_to_name",
    "name_to_cipher_code",
    "name_to_version",
    "version_to_name",
]
