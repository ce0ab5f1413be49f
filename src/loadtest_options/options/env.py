"""
loadtest-options — environment variable bindings

File: src/loadtest_options/options/env.py
Last updated: 2026-10-18

Purpose
- Build an ``Options`` layer from ``LOADTEST_*`` environment variables.

What should be included in this file
- Deterministic coercion per field kind (bool, int, duration, lists, maps, JSON).

Functional requirements
- An unset variable leaves its field unset; an empty list variable yields an empty list.
- Coercion failures name the offending variable.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Mapping
from typing import Final

from loadtest_options.errors import MalformedShape
from loadtest_options.options.model import OPTION_FIELDS, FieldKind, OptionField, Options
from loadtest_options.options.values import (
    Stage,
    decode_address,
    decode_networks,
    parse_duration,
)
from loadtest_options.tls.ciphers import CipherSuiteList
from loadtest_options.tls.versions import VersionRange

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


def options_from_environ(environ: Mapping[str, str] | None = None) -> Options:
    """Return the options set by environment variables; unset variables stay unset."""

    env_map = os.environ if environ is None else environ
    values: dict[str, object] = {}
    for binding in OPTION_FIELDS:
        if binding.env_var is None:
            continue
        raw = env_map.get(binding.env_var)
        if raw is None:
            continue
        values[binding.name] = coerce_env(binding, raw)
    return Options(**values)


def env_bindings() -> dict[str, str]:
    """Map environment variable name -> option attribute name."""

    return {
        binding.env_var: binding.name for binding in OPTION_FIELDS if binding.env_var is not None
    }


def coerce_env(binding: OptionField, raw: str) -> object:
    if binding.env_var is None:
        raise ValueError(f"option {binding.name!r} has no environment binding")
    coercer = _COERCERS[binding.kind]
    value = raw if binding.kind == "str" else raw.strip()
    return coercer(value, binding.env_var, binding)


def _coerce_bool(value: str, env_name: str, binding: OptionField) -> bool:
    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise MalformedShape("boolean (true/false/1/0/yes/no/on/off)", value, path=env_name)


def _coerce_int(value: str, env_name: str, binding: OptionField) -> int:
    try:
        return int(value, 10)
    except ValueError:
        raise MalformedShape("integer", value, path=env_name) from None


def _coerce_str(value: str, env_name: str, binding: OptionField) -> str:
    return value


def _coerce_duration(value: str, env_name: str, binding: OptionField) -> object:
    return parse_duration(value, path=env_name)


def _coerce_str_list(value: str, env_name: str, binding: OptionField) -> tuple[str, ...]:
    return tuple(_split_items(value))


def _coerce_cipher_suites(value: str, env_name: str, binding: OptionField) -> CipherSuiteList:
    return CipherSuiteList.from_names(_split_items(value), path=env_name)


def _coerce_stages(value: str, env_name: str, binding: OptionField) -> tuple[Stage, ...]:
    stages: list[Stage] = []
    for index, item in enumerate(_split_items(value)):
        item_path = f"{env_name}[{index}]"
        duration_text, separator, target_text = item.partition(":")
        duration = parse_duration(duration_text, path=item_path) if duration_text.strip() else None
        target: int | None = None
        if separator and target_text.strip():
            target = _coerce_int(target_text.strip(), item_path, binding)
        stages.append(Stage(duration=duration, target=target))
    return tuple(stages)


def _coerce_tls_version(value: str, env_name: str, binding: OptionField) -> VersionRange:
    if value.startswith("{"):
        return VersionRange.from_json(_load_json(value, env_name), path=env_name)
    return VersionRange.from_json(value, path=env_name)


def _coerce_json(value: str, env_name: str, binding: OptionField) -> object:
    return binding.decode(_load_json(value, env_name), env_name)


def _coerce_networks(value: str, env_name: str, binding: OptionField) -> object:
    return decode_networks(_split_items(value), env_name)


def _coerce_hosts(value: str, env_name: str, binding: OptionField) -> object:
    if value.startswith("{"):
        return binding.decode(_load_json(value, env_name), env_name)
    hosts: dict[str, object] = {}
    for index, item in enumerate(_split_items(value)):
        item_path = f"{env_name}[{index}]"
        host, separator, address = item.partition(":")
        if not separator or not host.strip():
            raise MalformedShape("host:address pair", item, path=item_path)
        hosts[host.strip()] = decode_address(address, item_path)
    return hosts


def _coerce_unsupported(value: str, env_name: str, binding: OptionField) -> object:
    raise MalformedShape("no environment binding", value, path=env_name)


def _split_items(value: str) -> list[str]:
    if not value.strip():
        return []
    return [item.strip() for item in value.split(",")]


def _load_json(value: str, env_name: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        raise MalformedShape("JSON text", value, path=env_name) from None


_COERCERS: Final[dict[FieldKind, Callable[[str, str, OptionField], object]]] = {
    "bool": _coerce_bool,
    "int": _coerce_int,
    "str": _coerce_str,
    "duration": _coerce_duration,
    "stages": _coerce_stages,
    "cipher_suites": _coerce_cipher_suites,
    "tls_version": _coerce_tls_version,
    "tls_auth": _coerce_json,
    "thresholds": _coerce_json,
    "networks": _coerce_networks,
    "hosts": _coerce_hosts,
    "external": _coerce_unsupported,
    "str_list": _coerce_str_list,
}


__all__ = ["coerce_env", "env_bindings", "options_from_environ"]
