from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from compression_eval.errors import EmptyResultsError


@dataclass(frozen=True)
class TimedResult:
    iteration_count: int
    duration_s: float  # per iteration

    def __post_init__(self) -> None:
        if self.iteration_count < 1:
            raise ValueError("iteration_count must be >= 1")
        if self.duration_s < 0:
            raise ValueError("duration_s must be >= 0")

    @property
    def duration_ms(self) -> float:
        return self.duration_s * 1e3

    @property
    def duration_us(self) -> float:
        return self.duration_s * 1e6


def _mean(xs: list[float]) -> float:
    if not xs:
        raise EmptyResultsError("mean of an empty result set is undefined")
    return sum(xs) / len(xs)


@dataclass(frozen=True)
class BenchmarkResults:
    by_file: Mapping[str, TimedResult] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_file", MappingProxyType(dict(self.by_file)))

    def __len__(self) -> int:
        return len(self.by_file)

    @property
    def mean_s(self) -> float:
        """Unweighted mean of the per-iteration durations. Raises EmptyResultsError if empty."""
        return _mean([r.duration_s for r in self.by_file.values()])

    @property
    def mean_ms(self) -> float:
        return self.mean_s * 1e3

    def by_file_name(self) -> list[tuple[str, TimedResult]]:
        return sorted(self.by_file.items(), key=lambda kv: kv[0])
