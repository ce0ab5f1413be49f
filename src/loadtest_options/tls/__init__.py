"""
loadtest-options — TLS constraint codecs

File: src/loadtest_options/tls/__init__.py
Last updated: 2026-10-18

Purpose
- Export symbol tables, version ranges, cipher suite lists, and client certificates.

Non-functional requirements
- No handshakes or network I/O; values here are consumed by connection code elsewhere.
"""

from loadtest_options.tls.auth import CertificateHandle, ClientCertificate
from loadtest_options.tls.ciphers import CipherSuiteList
from loadtest_options.tls.symbols import (
    CIPHER_SUITE_NAMES,
    SUPPORTED_CIPHER_SUITES,
    SUPPORTED_VERSIONS,
    VERSION_NAMES,
    ProtocolVersion,
    cipher_code_to_name,
    name_to_cipher_code,
    name_to_version,
    version_to_name,
)
from loadtest_options.tls.versions import VersionRange, decode_version, encode_version

__all__ = [
    "CIPHER_SUITE_NAMES",
    "CertificateHandle",
    "CipherSuiteList",
    "ClientCertificate",
    "ProtocolVersion",
    "SUPPORTED_CIPHER_SUITES",
    "SUPPORTED_VERSIONS",
    "VERSION_NAMES",
    "VersionRange",
    "cipher_code_to_name",
    "decode_version",
    "encode_version",
    "name_to_cipher_code",
    "name_to_version",
    "version_to_name",
]
