"""
loadtest-options — layered options loader

File: src/loadtest_options/options/loader.py
Last updated: 2026-10-18

Purpose
- Resolve effective options from defaults, an options file, env vars, and CLI overrides.

What should be included in this file
- Precedence logic: CLI > env (LOADTEST_) > file > defaults.
- JSON loading via ``json`` and TOML loading via ``tomllib``, selected by file suffix.
- Redacted deterministic dump of effective options.

Functional requirements
- Decode errors propagate unchanged; I/O and syntax errors raise ``OptionsLoadError``.
- An explicitly named options file must exist; the implicit default file is optional.

Non-functional requirements
- Keep loading deterministic and reproducible.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from loadtest_options.constants import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_OPTIONS_FILE,
    DEFAULT_SUMMARY_TREND_STATS,
    REDACTED_VALUE,
)
from loadtest_options.options.env import options_from_environ
from loadtest_options.options.model import Options, merge_options

_logger = structlog.get_logger(__name__)


class OptionsLoadError(ValueError):
    """Raised when an options file cannot be read or parsed."""


def default_options() -> Options:
    """Return the built-in base layer."""

    return Options(
        paused=False,
        vus=1,
        vus_max=1,
        max_redirects=DEFAULT_MAX_REDIRECTS,
        insecure_skip_tls_verify=False,
        throw=False,
        no_connection_reuse=False,
        summary_trend_stats=DEFAULT_SUMMARY_TREND_STATS,
    )


def load_options(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    cli_overrides: Options | Mapping[str, object] | None = None,
) -> Options:
    """Load effective options with deterministic precedence: CLI > env > file > defaults."""

    resolved_path = _resolve_options_path(config_path)
    explicit_path = config_path is not None
    env_map = dict(os.environ if environ is None else environ)

    layers: list[tuple[str, Options]] = [
        ("defaults", default_options()),
        ("file", load_options_file(resolved_path, required=explicit_path)),
        ("env", options_from_environ(env_map)),
        ("cli", _materialize_cli_overrides(cli_overrides)),
    ]
    for source, layer in layers:
        _logger.debug("options_layer_loaded", source=source, fields=sorted(layer.set_fields()))

    resolved = merge_options(*(layer for _, layer in layers))
    _logger.info("options_resolved", fields=sorted(resolved.set_fields()))
    return resolved


def load_options_file(path: str | Path, *, required: bool = True) -> Options:
    """Decode one options file; ``.toml`` files use TOML, everything else JSON."""

    resolved = Path(path)
    payload = _read_payload(resolved, required=required)
    return Options.from_dict(payload)


def effective_options(options: Options) -> dict[str, Any]:
    """Return a redacted JSON-like representation suitable for logging."""

    payload = options.to_dict()
    auths = payload.get("tlsAuth")
    if isinstance(auths, list):
        payload["tlsAuth"] = [{**auth, "key": REDACTED_VALUE} for auth in auths]
    return payload


def dump_effective_options(options: Options) -> str:
    """Return deterministic JSON dump of redacted effective options."""

    return json.dumps(
        effective_options(options), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def _resolve_options_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / DEFAULT_OPTIONS_FILE).resolve()
    return Path(config_path).expanduser().resolve()


def _read_payload(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise OptionsLoadError(f"options file not found: {path}")
        return {}

    try:
        if path.suffix.lower() == ".toml":
            with path.open("rb") as handle:
                parsed: object = tomllib.load(handle)
        else:
            with path.open("r", encoding="utf-8") as handle:
                parsed = json.load(handle)
    except UnicodeDecodeError as exc:
        raise OptionsLoadError(f"invalid UTF-8 in {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise OptionsLoadError(f"invalid TOML in {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise OptionsLoadError(f"invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise OptionsLoadError(f"unable to read options file {path}: {exc}") from exc

    if not isinstance(parsed, dict):
        raise OptionsLoadError(f"options root must be an object: {path}")

    return parsed


def _materialize_cli_overrides(cli_overrides: Options | Mapping[str, object] | None) -> Options:
    if cli_overrides is None:
        return Options()
    if isinstance(cli_overrides, Options):
        return cli_overrides
    return Options.from_dict(cli_overrides)


__all__ = [
    "OptionsLoadError",
    "default_options",
    "dump_effective_options",
    "effective_options",
    "load_options",
    "load_options_file",
]
