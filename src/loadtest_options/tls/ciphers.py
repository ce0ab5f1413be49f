"""
loadtest-options — cipher suite allow-lists

File: src/loadtest_options/tls/ciphers.py
Last updated: 2026-10-18

Purpose
- Ordered cipher suite lists decoded from, and encoded back to, symbolic names.

Functional requirements
- Decoding preserves order and duplicates and stops at the first unknown name.
- ``from_names(lst.names()) == lst`` for every list built from supported suites.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import overload

from loadtest_options.errors import MalformedShape, UnknownCipherSuite
from loadtest_options.tls.symbols import cipher_code_to_name, name_to_cipher_code


@dataclass(frozen=True, slots=True)
class CipherSuiteList(Sequence[int]):
    """Immutable ordered list of IANA cipher suite codes."""

    codes: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        codes = tuple(self.codes)
        for index, code in enumerate(codes):
            if isinstance(code, bool) or not isinstance(code, int):
                raise MalformedShape("cipher suite code", code, path=f"codes[{index}]")
            if cipher_code_to_name(code) is None:
                raise UnknownCipherSuite(code, path=f"codes[{index}]")
        object.__setattr__(self, "codes", codes)

    @classmethod
    def from_names(cls, names: object, *, path: str = "tlsCipherSuites") -> CipherSuiteList:
        if isinstance(names, str) or not isinstance(names, (list, tuple)):
            raise MalformedShape("list of cipher suite names", names, path=path)

        codes: list[int] = []
        for index, name in enumerate(names):
            item_path = f"{path}[{index}]"
            if not isinstance(name, str):
                raise MalformedShape("cipher suite name string", name, path=item_path)
            code = name_to_cipher_code(name)
            if code is None:
                raise UnknownCipherSuite(name, path=item_path)
            codes.append(code)
        return cls(tuple(codes))

    @classmethod
    def from_codes(cls, codes: Iterable[int]) -> CipherSuiteList:
        return cls(tuple(codes))

    def names(self) -> tuple[str, ...]:
        # Codes are validated on construction, so every lookup succeeds.
        return tuple(str(cipher_code_to_name(code)) for code in self.codes)

    def to_json(self) -> list[str]:
        return list(self.names())

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> CipherSuiteList: ...

    def __getitem__(self, index: int | slice) -> int | CipherSuiteList:
        if isinstance(index, slice):
            return CipherSuiteList(self.codes[index])
        return self.codes[index]

    def __len__(self) -> int:
        return len(self.codes)


__all__ = ["CipherSuiteList"]
