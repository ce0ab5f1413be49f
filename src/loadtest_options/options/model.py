"""
loadtest-options — options model and override merge

File: src/loadtest_options/options/model.py
Last updated: 2026-10-18

Purpose
- Define the flat ``Options`` record and the field-by-field override merge.

What should be included in this file
- One binding per field: attribute, JSON key, environment variable, value kind, codecs.
- JSON-like decode (``from_dict``) and encode (``to_dict``) of set fields only.
- ``Options.apply`` and the left-to-right ``merge_options`` fold.

Functional requirements
- ``None`` is the only "unset" signal; ``0``, ``False``, ``""`` and empty containers are set.
- A set field in the override replaces the base field wholesale; containers are never
  merged element-wise.
- Merging never validates, never fails, and never mutates its inputs.

Non-functional requirements
- Decoding is fail-fast and reports the dotted path of the first bad field.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from datetime import timedelta
from types import MappingProxyType
from typing import Any, Final, Literal

from loadtest_options.constants import ENV_PREFIX
from loadtest_options.errors import MalformedShape
from loadtest_options.options.values import (
    IPAddress,
    IPNetwork,
    Stage,
    as_bool,
    as_int,
    as_list,
    as_object,
    as_str,
    as_str_tuple,
    decode_duration,
    decode_external,
    decode_hosts,
    decode_networks,
    decode_stages,
    decode_thresholds,
    format_duration,
)
from loadtest_options.tls.auth import ClientCertificate
from loadtest_options.tls.ciphers import CipherSuiteList
from loadtest_options.tls.versions import VersionRange

FieldKind = Literal[
    "bool",
    "int",
    "str",
    "duration",
    "stages",
    "cipher_suites",
    "tls_version",
    "tls_auth",
    "thresholds",
    "networks",
    "hosts",
    "external",
    "str_list",
]


@dataclass(frozen=True, slots=True)
class Options:
    """Load-test options; every field is unset (``None``) unless given.

    Example::

        base = Options(vus=10, vus_max=10)
        base.apply(Options(vus=5))  # Options(vus=5, vus_max=10)
    """

    # Start the test paused.
    paused: bool | None = None

    # Initial VUs, max VUs, duration cap, iteration cap, and ramping stages.
    vus: int | None = None
    vus_max: int | None = None
    duration: timedelta | None = None
    iterations: int | None = None
    stages: tuple[Stage, ...] | None = None

    # Global request rate limit per second.
    rps: int | None = None

    max_redirects: int | None = None
    user_agent: str | None = None

    # Parallel batch requests, in total and per host.
    batch: int | None = None
    batch_per_host: int | None = None

    # Log HTTP requests and responses; "full" includes bodies.
    http_debug: str | None = None

    # TLS: accept untrusted certificates, restrict suites/versions, present client certs.
    insecure_skip_tls_verify: bool | None = None
    tls_cipher_suites: CipherSuiteList | None = None
    tls_version: VersionRange | None = None
    tls_auth: tuple[ClientCertificate, ...] | None = None

    # Raise warnings such as failed requests as errors.
    throw: bool | None = None

    # Metric name (optionally with a "{tag:value}" submetric filter) -> threshold expressions.
    thresholds: Mapping[str, tuple[str, ...]] | None = None

    # IP ranges tests may not contact.
    blacklist_ips: tuple[IPNetwork, ...] | None = None

    # DNS overrides.
    hosts: Mapping[str, IPAddress] | None = None

    # Do not reuse connections between iterations.
    no_connection_reuse: bool | None = None

    # Opaque values for third-party collectors; not settable from the environment.
    external: Mapping[str, Any] | None = None

    summary_trend_stats: tuple[str, ...] | None = None

    # Mapping fields are read-only proxies, which are unhashable.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        for name in ("stages", "tls_auth", "blacklist_ips", "summary_trend_stats"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        if self.thresholds is not None:
            object.__setattr__(
                self,
                "thresholds",
                MappingProxyType({key: tuple(exprs) for key, exprs in self.thresholds.items()}),
            )
        for name in ("hosts", "external"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    @classmethod
    def from_dict(cls, payload: object) -> Options:
        """Decode a flat JSON-like object; ``null`` values leave the field unset."""

        data = as_object(payload, "")
        values: dict[str, object] = {}
        for key in sorted(data):
            binding = _BY_JSON_KEY.get(key)
            if binding is None:
                raise MalformedShape("known option key", key, path=key)
            raw = data[key]
            if raw is None:
                continue
            values[binding.name] = binding.decode(raw, binding.json_key)
        return cls(**values)

    def to_dict(self) -> dict[str, object]:
        """Encode set fields to their JSON-like form, in field order."""

        out: dict[str, object] = {}
        for binding in OPTION_FIELDS:
            value = getattr(self, binding.name)
            if value is not None:
                out[binding.json_key] = binding.encode(value)
        return out

    def set_fields(self) -> tuple[str, ...]:
        return tuple(
            binding.name for binding in OPTION_FIELDS if getattr(self, binding.name) is not None
        )

    def is_set(self, name: str) -> bool:
        if name not in _BY_NAME:
            raise AttributeError(f"unknown option {name!r}")
        return getattr(self, name) is not None

    def apply(self, override: Options) -> Options:
        """Return a copy of ``self`` with every field set on ``override`` taken from it."""

        changes: dict[str, object] = {}
        for binding in OPTION_FIELDS:
            value = getattr(override, binding.name)
            if value is not None:
                changes[binding.name] = value
        return replace(self, **changes)


def merge_options(*layers: Options) -> Options:
    """Fold ``layers`` left to right; later layers win per field."""

    merged = Options()
    for layer in layers:
        merged = merged.apply(layer)
    return merged


@dataclass(frozen=True, slots=True)
class OptionField:
    """Binding of one ``Options`` attribute to its external names and codecs."""

    name: str
    json_key: str
    env_var: str | None
    kind: FieldKind
    decode: Callable[[object, str], object]
    encode: Callable[[Any], object]


def _decode_cipher_suites(value: object, path: str) -> CipherSuiteList:
    return CipherSuiteList.from_names(value, path=path)


def _decode_tls_version(value: object, path: str) -> VersionRange:
    return VersionRange.from_json(value, path=path)


def _decode_tls_auth(value: object, path: str) -> tuple[ClientCertificate, ...]:
    items = as_list(value, path)
    return tuple(
        ClientCertificate.from_json(item, path=f"{path}[{index}]")
        for index, item in enumerate(items)
    )


def _identity(value: Any) -> object:
    return value


def _encode_stages(value: tuple[Stage, ...]) -> list[dict[str, object]]:
    return [stage.to_json() for stage in value]


def _encode_tls_auth(value: tuple[ClientCertificate, ...]) -> list[dict[str, object]]:
    return [auth.to_json() for auth in value]


def _encode_thresholds(value: Mapping[str, tuple[str, ...]]) -> dict[str, list[str]]:
    return {name: list(value[name]) for name in sorted(value)}


def _encode_networks(value: tuple[IPNetwork, ...]) -> list[str]:
    return [str(network) for network in value]


def _encode_hosts(value: Mapping[str, IPAddress]) -> dict[str, str]:
    return {host: str(value[host]) for host in sorted(value)}


def _encode_external(value: Mapping[str, Any]) -> dict[str, Any]:
    return {key: copy.deepcopy(value[key]) for key in sorted(value)}


def _field(
    name: str,
    json_key: str,
    kind: FieldKind,
    decode: Callable[[object, str], object],
    encode: Callable[[Any], object] = _identity,
    *,
    env_suffix: str | None = "",
) -> OptionField:
    if env_suffix is None:
        env_var = None
    else:
        env_var = ENV_PREFIX + (env_suffix or name.upper())
    return OptionField(
        name=name,
        json_key=json_key,
        env_var=env_var,
        kind=kind,
        decode=decode,
        encode=encode,
    )


OPTION_FIELDS: Final[tuple[OptionField, ...]] = (
    _field("paused", "paused", "bool", as_bool),
    _field("vus", "vus", "int", as_int),
    _field("vus_max", "vusMax", "int", as_int),
    _field("duration", "duration", "duration", decode_duration, format_duration),
    _field("iterations", "iterations", "int", as_int),
    _field("stages", "stages", "stages", decode_stages, _encode_stages),
    _field("rps", "rps", "int", as_int),
    _field("max_redirects", "maxRedirects", "int", as_int),
    _field("user_agent", "userAgent", "str", as_str),
    _field("batch", "batch", "int", as_int),
    _field("batch_per_host", "batchPerHost", "int", as_int),
    _field("http_debug", "httpDebug", "str", as_str),
    _field("insecure_skip_tls_verify", "insecureSkipTLSVerify", "bool", as_bool),
    _field(
        "tls_cipher_suites",
        "tlsCipherSuites",
        "cipher_suites",
        _decode_cipher_suites,
        lambda value: value.to_json(),
    ),
    _field(
        "tls_version",
        "tlsVersion",
        "tls_version",
        _decode_tls_version,
        lambda value: value.to_json(),
    ),
    _field(
        "tls_auth",
        "tlsAuth",
        "tls_auth",
        _decode_tls_auth,
        _encode_tls_auth,
        env_suffix="TLSAUTH",
    ),
    _field("throw", "throw", "bool", as_bool),
    _field("thresholds", "thresholds", "thresholds", decode_thresholds, _encode_thresholds),
    _field("blacklist_ips", "blacklistIPs", "networks", decode_networks, _encode_networks),
    _field("hosts", "hosts", "hosts", decode_hosts, _encode_hosts),
    _field("no_connection_reuse", "noConnectionReuse", "bool", as_bool),
    _field("external", "ext", "external", decode_external, _encode_external, env_suffix=None),
    _field("summary_trend_stats", "summaryTrendStats", "str_list", as_str_tuple, list),
)

_BY_NAME: Final[Mapping[str, OptionField]] = MappingProxyType(
    {binding.name: binding for binding in OPTION_FIELDS}
)
_BY_JSON_KEY: Final[Mapping[str, OptionField]] = MappingProxyType(
    {binding.json_key: binding for binding in OPTION_FIELDS}
)


def option_field(name: str) -> OptionField:
    return _BY_NAME[name]


__all__ = [
    "OPTION_FIELDS",
    "FieldKind",
    "OptionField",
    "Options",
    "merge_options",
    "option_field",
]
