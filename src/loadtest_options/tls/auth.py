"""
loadtest-options — TLS client certificates

File: src/loadtest_options/tls/auth.py
Last updated: 2026-10-18

Purpose
- Hold a PEM certificate/key pair together with the host patterns it is presented to.

What should be included in this file
- ``ClientCertificate`` with a once-computed parsed handle.
- JSON decode/encode of ``{"cert", "key", "domains"}`` objects.

Functional requirements
- Parsing happens at most once on success; concurrent first access runs a single parse.
- Decoding parses eagerly so bad key material fails the configuration load.
- Failed parses are not cached and surface as ``CertificateParseError``.

Non-functional requirements
- Private key material is never logged or included in ``repr``.
"""

from __future__ import annotations

import fnmatch
import re
import ssl
import tempfile
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

import structlog

from loadtest_options.errors import CertificateParseError, MalformedShape

_logger = structlog.get_logger(__name__)

_AUTH_KEYS: Final[frozenset[str]] = frozenset({"cert", "key", "domains"})
_CERT_BLOCK_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"-----BEGIN CERTIFICATE-----.+?-----END CERTIFICATE-----",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class CertificateHandle:
    """Loaded key pair: a client context carrying the chain and the leaf DER bytes."""

    context: ssl.SSLContext = field(repr=False, compare=False)
    certificate_der: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class ClientCertificate:
    """PEM certificate and key presented to hosts matching ``domains``."""

    cert: str
    key: str = field(repr=False)
    domains: tuple[str, ...] = ()
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )
    _handle: CertificateHandle | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "domains", tuple(self.domains))

    @classmethod
    def from_json(cls, value: object, *, path: str = "tlsAuth") -> ClientCertificate:
        if not isinstance(value, Mapping):
            raise MalformedShape("object with cert, key and domains", value, path=path)
        for key in sorted(str(item) for item in value):
            if key not in _AUTH_KEYS:
                raise MalformedShape("'cert', 'key' or 'domains' key", key, path=f"{path}.{key}")

        cert = value.get("cert")
        if not isinstance(cert, str):
            raise MalformedShape("PEM certificate string", cert, path=f"{path}.cert")
        key_pem = value.get("key")
        if not isinstance(key_pem, str):
            raise MalformedShape("PEM private key string", key_pem, path=f"{path}.key")

        raw_domains = value.get("domains")
        domains: list[str] = []
        if raw_domains is not None:
            if isinstance(raw_domains, str) or not isinstance(raw_domains, (list, tuple)):
                raise MalformedShape("list of domain patterns", raw_domains, path=f"{path}.domains")
            for index, domain in enumerate(raw_domains):
                if not isinstance(domain, str):
                    raise MalformedShape(
                        "domain pattern string", domain, path=f"{path}.domains[{index}]"
                    )
                domains.append(domain)

        auth = cls(cert=cert, key=key_pem, domains=tuple(domains))
        auth.parse(path=path)
        return auth

    def to_json(self) -> dict[str, object]:
        return {"cert": self.cert, "key": self.key, "domains": list(self.domains)}

    @property
    def is_parsed(self) -> bool:
        return self._handle is not None

    def parse(self, *, path: str = "") -> CertificateHandle:
        """Return the parsed key pair, loading it on first use."""

        handle = self._handle
        if handle is not None:
            return handle
        with self._lock:
            handle = self._handle
            if handle is None:
                handle = self._load(path=path)
                object.__setattr__(self, "_handle", handle)
        return handle

    def load_into(self, context: ssl.SSLContext, *, path: str = "") -> None:
        """Load this key pair into an existing ``context``."""

        with tempfile.TemporaryDirectory(prefix="loadtest-tls-") as tmp:
            cert_path = Path(tmp) / "cert.pem"
            key_path = Path(tmp) / "key.pem"
            try:
                cert_path.write_text(self.cert, encoding="utf-8")
                key_path.touch(mode=0o600)
                key_path.write_text(self.key, encoding="utf-8")
                context.load_cert_chain(certfile=cert_path, keyfile=key_path)
            except UnicodeEncodeError as exc:
                raise CertificateParseError(
                    f"PEM text is not encodable: {exc.reason}", domains=self.domains, path=path
                ) from exc
            except ssl.SSLError as exc:
                raise CertificateParseError(
                    _describe_ssl_error(exc), domains=self.domains, path=path
                ) from exc
            except OSError as exc:
                raise CertificateParseError(str(exc), domains=self.domains, path=path) from exc

    def matches(self, hostname: str) -> bool:
        """Return whether ``hostname`` matches any of the domain glob patterns."""

        host = hostname.strip().rstrip(".").lower()
        if not host:
            return False
        return any(fnmatch.fnmatchcase(host, pattern.strip().lower()) for pattern in self.domains)

    def _load(self, *, path: str) -> CertificateHandle:
        leaf = _CERT_BLOCK_PATTERN.search(self.cert)
        if leaf is None:
            raise CertificateParseError(
                "no PEM CERTIFICATE block found", domains=self.domains, path=path
            )
        try:
            der = ssl.PEM_cert_to_DER_cert(leaf.group(0))
        except ValueError as exc:
            raise CertificateParseError(
                f"malformed certificate PEM: {exc}", domains=self.domains, path=path
            ) from exc

        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        self.load_into(context, path=path)
        _logger.debug("tls_client_certificate_parsed", domains=list(self.domains))
        return CertificateHandle(context=context, certificate_der=der)


def _describe_ssl_error(exc: ssl.SSLError) -> str:
    reason = getattr(exc, "reason", None)
    if isinstance(reason, str) and reason:
        return reason.lower().replace("_", " ")
    return str(exc)


__all__ = ["CertificateHandle", "ClientCertificate"]
