"""Shared fixtures: PEM key pairs generated for tests (RSA 2048, self-signed)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

TLS_FIXTURES = Path(__file__).resolve().parent / "fixtures" / "tls"


@dataclass(frozen=True)
class PemPair:
    cert: str
    key: str


def _read_pair(name: str) -> PemPair:
    return PemPair(
        cert=(TLS_FIXTURES / f"{name}.crt").read_text(encoding="utf-8"),
        key=(TLS_FIXTURES / f"{name}.key").read_text(encoding="utf-8"),
    )


@pytest.fixture(scope="session")
def alpha_pair() -> PemPair:
    return _read_pair("alpha")


@pytest.fixture(scope="session")
def beta_pair() -> PemPair:
    return _read_pair("beta")
