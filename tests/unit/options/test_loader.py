"""
loadtest-options — unit tests for layered option loading

File: tests/unit/options/test_loader.py
Last updated: 2026-10-18

Purpose
- Validate precedence across defaults, options file, environment, and CLI overrides.

What this test file should cover
- CLI > env > file > defaults.
- JSON and TOML options files; missing and malformed files.
- Deterministic, redacted effective-options dumps.
- Structured log events for each layer.

Functional requirements
- No network usage; files live under tmp_path.

Non-functional requirements
- Deterministic and fast.
"""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from loadtest_options.constants import DEFAULT_SUMMARY_TREND_STATS, REDACTED_VALUE
from loadtest_options.errors import MalformedShape, UnknownVersionName
from loadtest_options.options.loader import (
    OptionsLoadError,
    default_options,
    dump_effective_options,
    effective_options,
    load_options,
    load_options_file,
)
from loadtest_options.options.model import Options


def _write_json(path: Path, payload: dict[str, object]) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_apply_without_file_env_or_cli(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    options = load_options(environ={})

    assert options == default_options()
    assert options.vus == 1
    assert options.summary_trend_stats == DEFAULT_SUMMARY_TREND_STATS
    assert options.duration is None


def test_precedence_cli_over_env_over_file(tmp_path: Path) -> None:
    config = _write_json(
        tmp_path / "options.json",
        {"vus": 10, "rps": 50, "userAgent": "from-file", "duration": "1m"},
    )

    options = load_options(
        config,
        environ={"LOADTEST_VUS": "20", "LOADTEST_USER_AGENT": "from-env"},
        cli_overrides={"vus": 30},
    )

    assert options.vus == 30
    assert options.user_agent == "from-env"
    assert options.rps == 50
    assert options.duration == timedelta(minutes=1)
    assert options.max_redirects == 10


def test_cli_overrides_accept_options_instance(tmp_path: Path) -> None:
    config = _write_json(tmp_path / "options.json", {"paused": True})

    options = load_options(config, environ={}, cli_overrides=Options(paused=False))

    assert options.paused is False


def test_toml_options_file(tmp_path: Path) -> None:
    config = tmp_path / "options.toml"
    config.write_text(
        'vus = 4\ntlsVersion = { min = "tls1.2" }\nsummaryTrendStats = ["avg"]\n',
        encoding="utf-8",
    )

    options = load_options_file(config)

    assert options.vus == 4
    assert options.tls_version is not None
    assert options.tls_version.to_json() == {"min": "tls1.2", "max": ""}
    assert options.summary_trend_stats == ("avg",)


def test_default_file_is_picked_up_from_cwd(tmp_path: Path, monkeypatch) -> None:
    _write_json(tmp_path / "loadtest.json", {"iterations": 7})
    monkeypatch.chdir(tmp_path)

    assert load_options(environ={}).iterations == 7


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(OptionsLoadError, match="options file not found"):
        load_options(tmp_path / "missing.json", environ={})


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    config = tmp_path / "broken.json"
    config.write_text("{vus: 1", encoding="utf-8")

    with pytest.raises(OptionsLoadError, match="invalid JSON"):
        load_options_file(config)


def test_invalid_toml_raises_load_error(tmp_path: Path) -> None:
    config = tmp_path / "broken.toml"
    config.write_text("vus = = 1", encoding="utf-8")

    with pytest.raises(OptionsLoadError, match="invalid TOML"):
        load_options_file(config)


def test_non_object_root_raises_load_error(tmp_path: Path) -> None:
    config = tmp_path / "list.json"
    config.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(OptionsLoadError, match="must be an object"):
        load_options_file(config)


def test_decode_errors_propagate_from_file(tmp_path: Path) -> None:
    config = _write_json(tmp_path / "options.json", {"tlsVersion": "tls2.0"})

    with pytest.raises(UnknownVersionName) as excinfo:
        load_options(config, environ={})

    assert excinfo.value.path == "tlsVersion"


def test_dump_redacts_private_keys(tmp_path: Path, alpha_pair) -> None:
    config = _write_json(
        tmp_path / "options.json",
        {"tlsAuth": [{"cert": alpha_pair.cert, "key": alpha_pair.key, "domains": []}]},
    )

    options = load_options(config, environ={})
    dumped = dump_effective_options(options)

    assert "PRIVATE KEY" not in dumped
    assert json.loads(dumped)["tlsAuth"][0]["key"] == REDACTED_VALUE
    assert effective_options(options)["tlsAuth"][0]["cert"] == alpha_pair.cert
    assert options.tls_auth is not None
    assert options.tls_auth[0].key == alpha_pair.key


def test_dump_is_deterministic(tmp_path: Path) -> None:
    config = _write_json(tmp_path / "options.json", {"rps": 5, "hosts": {"b": "::1", "a": "::2"}})

    first = dump_effective_options(load_options(config, environ={}))
    second = dump_effective_options(load_options(config, environ={}))

    assert first == second
    assert list(json.loads(first)) == sorted(json.loads(first))


def test_layers_are_logged(tmp_path: Path) -> None:
    config = _write_json(tmp_path / "options.json", {"rps": 5})

    with capture_logs() as logs:
        load_options(config, environ={"LOADTEST_VUS": "2"}, cli_overrides={"throw": True})

    layer_events = [entry for entry in logs if entry["event"] == "options_layer_loaded"]
    assert [entry["source"] for entry in layer_events] == ["defaults", "file", "env", "cli"]
    assert layer_events[1]["fields"] == ["rps"]
    assert layer_events[2]["fields"] == ["vus"]
    assert layer_events[3]["fields"] == ["throw"]
    resolved = [entry for entry in logs if entry["event"] == "options_resolved"]
    assert len(resolved) == 1
    assert resolved[0]["log_level"] == "info"


def test_invalid_utf8_raises_load_error(tmp_path: Path) -> None:
    config = tmp_path / "latin.json"
    config.write_bytes(b'{"userAgent": "\xff\xfe"}')

    with pytest.raises(OptionsLoadError, match="invalid UTF-8"):
        load_options_file(config)


def test_toml_datetime_under_ext_is_rejected(tmp_path: Path) -> None:
    config = tmp_path / "options.toml"
    config.write_text("[ext]\nwhen = 1979-05-27T07:32:00Z\n", encoding="utf-8")

    with pytest.raises(MalformedShape, match="JSON value") as excinfo:
        load_options_file(config)

    assert excinfo.value.path == "ext.when"


def test_toml_ext_tables_dump_cleanly(tmp_path: Path) -> None:
    config = tmp_path / "options.toml"
    config.write_text('[ext.collector]\nprojectID = 7\ntags = ["a", "b"]\n', encoding="utf-8")

    dumped = dump_effective_options(load_options(config, environ={}))

    assert json.loads(dumped)["ext"] == {"collector": {"projectID": 7, "tags": ["a", "b"]}}
