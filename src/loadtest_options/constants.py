"""Stable constants shared across the options and TLS codecs."""

from __future__ import annotations

from typing import Final

# Environment bindings.
ENV_PREFIX: Final[str] = "LOADTEST_"

# Options file looked up in the working directory when no path is given.
DEFAULT_OPTIONS_FILE: Final[str] = "loadtest.json"

# Placeholder written over private key material in dumps.
REDACTED_VALUE: Final[str] = "<redacted>"

# Default trend columns for end-of-test summaries.
DEFAULT_SUMMARY_TREND_STATS: Final[tuple[str, ...]] = (
    "avg",
    "min",
    "med",
    "max",
    "p(90)",
    "p(95)",
)

DEFAULT_MAX_REDIRECTS: Final[int] = 10

__all__ = [
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_OPTIONS_FILE",
    "DEFAULT_SUMMARY_TREND_STATS",
    "ENV_PREFIX",
    "REDACTED_VALUE",
]
