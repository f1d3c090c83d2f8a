from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from compression_eval.methods import Method

logger = logging.getLogger(__name__)

FIELD_COUNT = 6
REPLICATE_COUNT = 3

# ASCII digits with an optional minus; no whitespace, "+" or "_".
_INT_RE = re.compile(r"-?[0-9]+")


class Platform(str, Enum):
    MACOS = "macOS"
    IOS = "iOS"

    def __str__(self) -> str:
        return self.value


class Segment(NamedTuple):
    method: Method
    platform: Platform

    def __str__(self) -> str:
        return f"{self.method.value} - {self.platform.value}"


@dataclass(frozen=True, eq=False)
class Observation:
    """
    One historical run: three replicate timings (microseconds) of a
    (platform, method, level) configuration.

    Compared and hashed by identity; two rows with the same fields are
    distinct observations.
    """

    platform: Platform
    method: Method
    level: int | None
    replicates_us: tuple[int, int, int]

    @property
    def mean_duration_us(self) -> float:
        return sum(self.replicates_us) / len(self.replicates_us)

    @property
    def mean_duration_ms(self) -> float:
        return self.mean_duration_us / 1e3

    @property
    def segment(self) -> Segment:
        return Segment(self.method, self.platform)

    def to_row(self) -> str:
        level = "" if self.level is None else str(self.level)
        fields = [self.platform.value, self.method.value, level, *map(str, self.replicates_us)]
        return "\t".join(fields)


class RowParseError(ValueError):
    pass


def _parse_int(raw: str, what: str) -> int:
    if _INT_RE.fullmatch(raw) is None:
        raise RowParseError(f"invalid {what}: {raw!r}")
    return int(raw)


def parse_row(line: str) -> Observation:
    # Empty trailing fields are significant; str.split keeps them.
    fields = [f.replace(",", "") for f in line.split("\t")]
    if len(fields) != FIELD_COUNT:
        raise RowParseError(f"expected {FIELD_COUNT} fields, got {len(fields)}")

    try:
        platform = Platform(fields[0])
    except ValueError as e:
        raise RowParseError(f"unknown platform: {fields[0]!r}") from e
    try:
        method = Method(fields[1])
    except ValueError as e:
        raise RowParseError(f"unknown method: {fields[1]!r}") from e

    level = None if fields[2] == "" else _parse_int(fields[2], "level")

    replicates = tuple(_parse_int(f, "duration") for f in fields[3:])
    if any(r < 0 for r in replicates):
        raise RowParseError(f"negative duration in {replicates}")

    return Observation(
        platform=platform,
        method=method,
        level=level,
        replicates_us=replicates,  # type: ignore[arg-type]
    )


def parse_observations(text: str) -> tuple[Observation, ...]:
    """
    Parse a tab-delimited table: platform, method, level, three durations (us).

    Thousands separators are stripped. Rows that fail to parse are logged and
    skipped; blank lines are ignored.
    """
    out: list[Observation] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        try:
            out.append(parse_row(line))
        except RowParseError as e:
            logger.warning("Skipping line %d (%s): %r", lineno, e, line)
    return tuple(out)


def format_observations(observations: Iterable[Observation]) -> str:
    return "\n".join(o.to_row() for o in observations)
