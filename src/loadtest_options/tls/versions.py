"""Protocol version constraints decoded from a scalar name or a ``{min, max}`` object."""

from __future__ import annotations

import ssl
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from loadtest_options.errors import InvalidVersionRange, MalformedShape, UnknownVersionName
from loadtest_options.tls.symbols import ProtocolVersion, name_to_version, version_to_name

_RANGE_KEYS: Final[frozenset[str]] = frozenset({"min", "max"})


def decode_version(value: object, *, path: str = "") -> ProtocolVersion:
    """Decode one version name; ``""`` and ``None`` mean unspecified."""

    if value is None:
        return ProtocolVersion.UNSPECIFIED
    if not isinstance(value, str):
        raise MalformedShape("TLS version name string", value, path=path)
    version = name_to_version(value)
    if version is None:
        raise UnknownVersionName(value, path=path)
    return version


def encode_version(version: ProtocolVersion) -> str:
    return version_to_name(version)


@dataclass(frozen=True, slots=True)
class VersionRange:
    """Allowed protocol versions; either bound may be ``UNSPECIFIED``."""

    min: ProtocolVersion = ProtocolVersion.UNSPECIFIED
    max: ProtocolVersion = ProtocolVersion.UNSPECIFIED

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", ProtocolVersion(self.min))
        object.__setattr__(self, "max", ProtocolVersion(self.max))

    @classmethod
    def exactly(cls, version: ProtocolVersion) -> VersionRange:
        return cls(min=version, max=version)

    @classmethod
    def from_json(cls, value: object, *, path: str = "tlsVersion") -> VersionRange:
        """Decode either ``"tls1.2"`` or ``{"min": "tls1.0", "max": "tls1.2"}``."""

        if isinstance(value, Mapping):
            for key in sorted(str(item) for item in value):
                if key not in _RANGE_KEYS:
                    raise MalformedShape("'min' or 'max' key", key, path=f"{path}.{key}")
            minimum = decode_version(value.get("min"), path=f"{path}.min")
            maximum = decode_version(value.get("max"), path=f"{path}.max")
        elif value is None or isinstance(value, str):
            minimum = maximum = decode_version(value, path=path)
        else:
            raise MalformedShape("TLS version name or {min, max} object", value, path=path)

        result = cls(min=minimum, max=maximum)
        result.validate(path=path)
        return result

    def to_json(self) -> dict[str, str]:
        return {"min": encode_version(self.min), "max": encode_version(self.max)}

    @property
    def is_unspecified(self) -> bool:
        return self.min is ProtocolVersion.UNSPECIFIED and self.max is ProtocolVersion.UNSPECIFIED

    def validate(self, *, path: str = "tlsVersion") -> None:
        if ProtocolVersion.UNSPECIFIED in (self.min, self.max):
            return
        if self.min > self.max:
            raise InvalidVersionRange(
                encode_version(self.min), encode_version(self.max), path=path
            )

    def contains(self, version: ProtocolVersion) -> bool:
        if self.min is not ProtocolVersion.UNSPECIFIED and version < self.min:
            return False
        return self.max is ProtocolVersion.UNSPECIFIED or version <= self.max

    def configure(self, context: ssl.SSLContext) -> ssl.SSLContext:
        """Apply the set bounds to ``context`` and return it."""

        if self.min is not ProtocolVersion.UNSPECIFIED:
            context.minimum_version = self.min.ssl_version
        if self.max is not ProtocolVersion.UNSPECIFIED:
            context.maximum_version = self.max.ssl_version
        return context


__all__ = ["VersionRange", "decode_version", "encode_version"]
