"""Value codecs for option fields: scalars, durations, stages, thresholds, and networks."""

from __future__ import annotations

import copy
import ipaddress
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Any, Final

from loadtest_options.errors import MalformedShape

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network
IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

_DURATION_PART: Final[re.Pattern[str]] = re.compile(
    r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
)
_MICROSECONDS_PER_UNIT: Final[dict[str, Decimal]] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}
_STAGE_KEYS: Final[frozenset[str]] = frozenset({"duration", "target"})


def as_bool(value: object, path: str) -> bool:
    if isinstance(value, bool):
        return value
    raise MalformedShape("boolean", value, path=path)


def as_int(value: object, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedShape("integer", value, path=path)
    return value


def as_str(value: object, path: str) -> str:
    if not isinstance(value, str):
        raise MalformedShape("string", value, path=path)
    return value


def as_list(value: object, path: str) -> list[object] | tuple[object, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise MalformedShape("list", value, path=path)
    return value


def as_object(value: object, path: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise MalformedShape("object", value, path=path)
    for key in value:
        if not isinstance(key, str):
            raise MalformedShape("string object key", key, path=path)
    return value


def as_str_tuple(value: object, path: str) -> tuple[str, ...]:
    items = as_list(value, path)
    return tuple(as_str(item, f"{path}[{index}]") for index, item in enumerate(items))


def parse_duration(text: str, *, path: str = "") -> timedelta:
    """Parse a duration string such as ``"1m30s"``, ``"250ms"`` or ``"-1.5h"``."""

    raw = text.strip()
    body = raw
    negative = False
    if body[:1] in {"-", "+"}:
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise MalformedShape("duration string", text, path=path)

    total = Decimal(0)
    position = 0
    while position < len(body):
        match = _DURATION_PART.match(body, position)
        if match is None:
            raise MalformedShape("duration string", text, path=path)
        total += Decimal(match.group(1)) * _MICROSECONDS_PER_UNIT[match.group(2)]
        position = match.end()

    microseconds = int(total.to_integral_value())
    try:
        return timedelta(microseconds=-microseconds if negative else microseconds)
    except OverflowError:
        raise MalformedShape("duration within timedelta range", text, path=path) from None


def format_duration(value: timedelta) -> str:
    """Render ``value`` in canonical form, e.g. ``"1h0m0s"``, ``"1m30s"``, ``"500ms"``."""

    total = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if total == 0:
        return "0s"
    sign = "-" if total < 0 else ""
    remaining = abs(total)
    if remaining < 1_000:
        return f"{sign}{remaining}µs"
    if remaining < 1_000_000:
        return f"{sign}{_fixed(remaining, 1_000)}ms"

    hours, remaining = divmod(remaining, 3_600_000_000)
    minutes, remaining = divmod(remaining, 60_000_000)
    rendered = sign
    if hours:
        rendered += f"{hours}h"
    if hours or minutes:
        rendered += f"{minutes}m"
    return f"{rendered}{_fixed(remaining, 1_000_000)}s"


def decode_duration(value: object, path: str) -> timedelta:
    return parse_duration(as_str(value, path), path=path)


@dataclass(frozen=True, slots=True)
class Stage:
    """One ramping step: reach ``target`` VUs over ``duration``."""

    duration: timedelta | None = None
    target: int | None = None

    @classmethod
    def from_json(cls, value: object, *, path: str = "stages") -> Stage:
        payload = as_object(value, path)
        for key in sorted(payload):
            if key not in _STAGE_KEYS:
                raise MalformedShape("'duration' or 'target' key", key, path=f"{path}.{key}")
        raw_duration = payload.get("duration")
        raw_target = payload.get("target")
        return cls(
            duration=None
            if raw_duration is None
            else decode_duration(raw_duration, f"{path}.duration"),
            target=None if raw_target is None else as_int(raw_target, f"{path}.target"),
        )

    def to_json(self) -> dict[str, object]:
        return {
            "duration": None if self.duration is None else format_duration(self.duration),
            "target": self.target,
        }


def decode_stages(value: object, path: str) -> tuple[Stage, ...]:
    items = as_list(value, path)
    return tuple(
        Stage.from_json(item, path=f"{path}[{index}]") for index, item in enumerate(items)
    )


def decode_thresholds(value: object, path: str) -> dict[str, tuple[str, ...]]:
    """Decode ``{"metric{tag:value}": ["p(95)<500", ...]}``."""

    payload = as_object(value, path)
    out: dict[str, tuple[str, ...]] = {}
    for name in sorted(payload):
        name_path = f"{path}.{name}"
        if not name.strip():
            raise MalformedShape("non-empty metric name", name, path=name_path)
        expressions = as_str_tuple(payload[name], name_path)
        for index, expression in enumerate(expressions):
            if not expression.strip():
                raise MalformedShape(
                    "non-empty threshold expression", expression, path=f"{name_path}[{index}]"
                )
        out[name] = expressions
    return out


def decode_network(value: object, path: str) -> IPNetwork:
    text = as_str(value, path).strip()
    try:
        return ipaddress.ip_network(text, strict=False)
    except ValueError:
        raise MalformedShape("CIDR network", value, path=path) from None


def decode_networks(value: object, path: str) -> tuple[IPNetwork, ...]:
    items = as_list(value, path)
    return tuple(decode_network(item, f"{path}[{index}]") for index, item in enumerate(items))


def decode_address(value: object, path: str) -> IPAddress:
    text = as_str(value, path).strip()
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        raise MalformedShape("IP address", value, path=path) from None


def decode_hosts(value: object, path: str) -> dict[str, IPAddress]:
    payload = as_object(value, path)
    return {host: decode_address(payload[host], f"{path}.{host}") for host in sorted(payload)}


def decode_external(value: object, path: str) -> dict[str, Any]:
    """Decode ``ext``; values must stay within the JSON data model."""

    payload = as_object(value, path)
    for key in payload:
        _check_json_value(payload[key], f"{path}.{key}")
    return {key: copy.deepcopy(payload[key]) for key in sorted(payload)}


def _check_json_value(value: object, path: str) -> None:
    if value is None or isinstance(value, (bool, int, float, str)):
        return
    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_json_value(item, f"{path}[{index}]")
        return
    if isinstance(value, Mapping):
        for key, item in as_object(value, path).items():
            _check_json_value(item, f"{path}.{key}")
        return
    raise MalformedShape("JSON value", value, path=path)


def _fixed(value: int, unit: int) -> str:
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(fraction).rjust(width, '0').rstrip('0')}"


__all__ = [
    "IPAddress",
    "IPNetwork",
    "Stage",
    "as_bool",
    "as_int",
    "as_list",
    "as_object",
    "as_str",
    "as_str_tuple",
    "decode_address",
    "decode_duration",
    "decode_external",
    "decode_hosts",
    "decode_network",
    "decode_networks",
    "decode_stages",
    "decode_thresholds",
    "format_duration",
    "parse_duration",
]
