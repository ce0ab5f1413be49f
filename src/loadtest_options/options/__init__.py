"""
loadtest-options — options package public API

File: src/loadtest_options/options/__init__.py
Last updated: 2026-10-18

Purpose
- Export the ``Options`` model, the override merge, env bindings, and the layered loader.

Functional requirements
- Support loading from ``loadtest.json`` (or TOML) + ``LOADTEST_`` env overrides.
- Fail fast with the first decode error.
"""

from loadtest_options.options.env import coerce_env, env_bindings, options_from_environ
from loadtest_options.options.loader import (
    OptionsLoadError,
    default_options,
    dump_effective_options,
    effective_options,
    load_options,
    load_options_file,
)
from loadtest_options.options.model import (
    OPTION_FIELDS,
    OptionField,
    Options,
    merge_options,
    option_field,
)
from loadtest_options.options.values import Stage, format_duration, parse_duration

__all__ = [
    "OPTION_FIELDS",
    "OptionField",
    "Options",
    "OptionsLoadError",
    "Stage",
    "coerce_env",
    "default_options",
    "dump_effective_options",
    "effective_options",
    "env_bindings",
    "format_duration",
    "load_options",
    "load_options_file",
    "merge_options",
    "option_field",
    "options_from_environ",
    "parse_duration",
]
