"""Memory sizes and human readable durations as printed on AtCoder."""

import re
from dataclasses import dataclass
from datetime import timedelta

_BYTE_UNITS = {
    "B": 1,
    "KB": 1000,
    "MB": 1000**2,
    "GB": 1000**3,
    "TB": 1000**4,
    "PB": 1000**5,
    "KIB": 1024,
    "MIB": 1024**2,
    "GIB": 1024**3,
    "TIB": 1024**4,
    "PIB": 1024**5,
}
_BYTES_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*$")

_DURATION_UNITS = {
    "nsec": 1e-9,
    "ns": 1e-9,
    "usec": 1e-6,
    "us": 1e-6,
    "msec": 1e-3,
    "ms": 1e-3,
    "seconds": 1,
    "second": 1,
    "sec": 1,
    "secs": 1,
    "s": 1,
    "minutes": 60,
    "minute": 60,
    "min": 60,
    "mins": 60,
    "m": 60,
    "hours": 3600,
    "hour": 3600,
    "hr": 3600,
    "hrs": 3600,
    "h": 3600,
    "days": 86400,
    "day": 86400,
    "d": 86400,
}
_DURATION_TOKEN = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([a-z]+)\s*")


@dataclass(frozen=True, order=True)
class Bytes:
    """Non-negative amount of memory, rendered canonically in MB."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"Bytes must be non-negative: {self.value}")

    @classmethod
    def parse(cls, text: str) -> "Bytes":
        """Parse ``"1024 MB"``, ``"256 MiB"``, ``"512"`` (plain bytes) and alike."""
        match = _BYTES_PATTERN.match(text)
        if not match:
            raise ValueError(f"Could not parse memory size: {text!r}")
        number, unit = match.groups()
        unit = unit.upper() or "B"
        if unit not in _BYTE_UNITS:
            raise ValueError(f"Unknown memory unit {unit!r} in {text!r}")
        return cls(round(float(number) * _BYTE_UNITS[unit]))

    def __str__(self) -> str:
        megabytes = self.value / _BYTE_UNITS["MB"]
        if self.value % _BYTE_UNITS["MB"] == 0:
            return f"{self.value // _BYTE_UNITS['MB']} MB"
        return f"{megabytes:.2f}".rstrip("0").rstrip(".") + " MB"

    def to_exact_str(self) -> str:
        """Like ``str()`` but falls back to plain bytes when MB would round."""
        if self.value % _BYTE_UNITS["MB"] == 0:
            return str(self)
        return f"{self.value} B"


def parse_duration(text: str) -> timedelta:
    """Parse a human readable duration such as ``"2 sec"`` or ``"1s 500ms"``."""
    normalized = text.strip().lower()
    if not normalized:
        raise ValueError("Could not parse empty duration")

    total = 0.0
    pos = 0
    while pos < len(normalized):
        match = _DURATION_TOKEN.match(normalized, pos)
        if not match:
            raise ValueError(f"Could not parse duration: {text!r}")
        number, unit = match.groups()
        if unit not in _DURATION_UNITS:
            raise ValueError(f"Unknown time unit {unit!r} in {text!r}")
        total += float(number) * _DURATION_UNITS[unit]
        pos = match.end()

    return timedelta(seconds=total)


def format_duration(duration: timedelta) -> str:
    """Render a duration so that :func:`parse_duration` reads it back exactly."""
    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return "0s"

    parts = []
    for unit, size in (("d", 86_400_000_000), ("h", 3_600_000_000), ("m", 60_000_000),
                       ("s", 1_000_000), ("ms", 1000), ("us", 1)):
        count, micros = divmod(micros, size)
        if count:
            parts.append(f"{count}{unit}")
    return " ".join(parts)
