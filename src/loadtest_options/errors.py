"""
loadtest-options — decode error kinds

File: src/loadtest_options/errors.py
Last updated: 2026-10-18

Purpose
- Typed failures raised while decoding TLS constraints and options payloads.

What should be included in this file
- One exception class per failure kind, all rooted at ``OptionsError``.
- The dotted field path of the offending input on every error.

Functional requirements
- Errors are terminal for a configuration load; decoding stops at the first one.
- Messages name the offending value so diagnostics need no extra context.

Non-functional requirements
- No imports from the rest of the package.
"""

from __future__ import annotations

from collections.abc import Sequence


class OptionsError(ValueError):
    """Base class for every options/TLS decode failure."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.detail = message
        if path:
            super().__init__(f"{path}: {message}")
        else:
            super().__init__(message)


class UnknownVersionName(OptionsError):
    """Raised when a non-empty protocol version name has no table entry."""

    def __init__(self, name: str, *, path: str = "") -> None:
        self.name = name
        super().__init__(path, f"unknown TLS version: {name!r}")


class UnknownCipherSuite(OptionsError):
    """Raised when a cipher suite name or code has no table entry."""

    def __init__(self, name: str | int, *, path: str = "") -> None:
        self.name = name
        if isinstance(name, int):
            rendered = f"0x{name:04x}"
        else:
            rendered = repr(name)
        super().__init__(path, f"unknown cipher suite: {rendered}")


class CertificateParseError(OptionsError):
    """Raised when a PEM certificate/key pair cannot be loaded."""

    def __init__(self, reason: str, *, domains: Sequence[str] = (), path: str = "") -> None:
        self.domains = tuple(domains)
        self.reason = reason
        super().__init__(path, f"invalid client certificate: {reason}")


class MalformedShape(OptionsError):
    """Raised when input matches none of the shapes accepted at ``path``."""

    def __init__(self, expected: str, got: object, *, path: str = "") -> None:
        self.expected = expected
        self.got = got
        super().__init__(path, f"expected {expected}, got {_describe(got)}")


class InvalidVersionRange(MalformedShape):
    """Raised when both version bounds are set and ``min`` exceeds ``max``."""

    def __init__(self, minimum: str, maximum: str, *, path: str = "") -> None:
        self.minimum = minimum
        self.maximum = maximum
        self.expected = "min <= max"
        self.got = {"min": minimum, "max": maximum}
        OptionsError.__init__(
            self, path, f"min version {minimum!r} is greater than max version {maximum!r}"
        )


def _describe(value: object) -> str:
    if isinstance(value, str):
        return repr(value) if len(value) <= 64 else f"{value[:61]!r}..."
    if isinstance(value, (bool, int, float)) or value is None:
        return repr(value)
    return type(value).__name__


__all__ = [
    "CertificateParseError",
    "InvalidVersionRange",
    "MalformedShape",
    "OptionsError",
    "UnknownCipherSuite",
    "UnknownVersionName",
]
