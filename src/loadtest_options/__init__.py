"""
loadtest-options — package root

File: src/loadtest_options/__init__.py
Last updated: 2026-10-18

Purpose
- Symbolic TLS constraint codecs and the layered override merge for load-test options.

What should be included in this file
- Version export and a small public API surface.

Functional requirements
- Must not have side effects at import time (no options loading, no logging setup).
"""

from loadtest_options.errors import (
    CertificateParseError,
    InvalidVersionRange,
    MalformedShape,
    OptionsError,
    UnknownCipherSuite,
    UnknownVersionName,
)
from loadtest_options.options import Options, load_options, merge_options
from loadtest_options.tls import (
    CipherSuiteList,
    ClientCertificate,
    ProtocolVersion,
    VersionRange,
)

__version__ = "0.1.0"

__all__ = [
    "CertificateParseError",
    "CipherSuiteList",
    "ClientCertificate",
    "InvalidVersionRange",
    "MalformedShape",
    "Options",
    "OptionsError",
    "ProtocolVersion",
    "UnknownCipherSuite",
    "UnknownVersionName",
    "VersionRange",
    "__version__",
    "load_options",
    "merge_options",
]
