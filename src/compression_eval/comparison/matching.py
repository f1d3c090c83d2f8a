from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from compression_eval.comparison.observations import Observation, Segment
from compression_eval.methods import PLATFORM_NATIVE_METHODS, Method


class MatchingError(ValueError):
    """Raised when matching inputs are invalid."""


@dataclass(frozen=True)
class ReferenceAverage:
    method: Method
    mean_ms: float


def _mean(xs: list[float]) -> float:
    return sum(xs) / len(xs)


def group_by_method(observations: Iterable[Observation]) -> dict[Method, list[Observation]]:
    out: dict[Method, list[Observation]] = {}
    for o in observations:
        out.setdefault(o.method, []).append(o)
    return out


def group_by_segment(observations: Iterable[Observation]) -> dict[Segment, list[Observation]]:
    out: dict[Segment, list[Observation]] = {}
    for o in observations:
        out.setdefault(o.segment, []).append(o)
    return out


def sort_observations(observations: Iterable[Observation]) -> list[Observation]:
    """Order for display: by method name, then platform name (stable)."""
    return sorted(observations, key=lambda o: (o.method.value, o.platform.value))


def compute_reference_averages(
    observations: Iterable[Observation],
    reference_methods: Iterable[Method] = PLATFORM_NATIVE_METHODS,
) -> list[ReferenceAverage]:
    """
    Average mean duration (ms) per reference method, across every level and
    platform it was observed on.

    Sorted ascending by average; ties keep first-seen method order.
    """
    refs = frozenset(reference_methods)
    averages = [
        ReferenceAverage(method=m, mean_ms=_mean([o.mean_duration_ms for o in runs]))
        for m, runs in group_by_method(observations).items()
        if m in refs
    ]
    return sorted(averages, key=lambda a: a.mean_ms)


def closest_runs(reference_ms: float, observations: Iterable[Observation]) -> list[Observation]:
    """
    Return 0 to 2 observations: the slowest at or below `reference_ms` and the
    fastest at or above it.

    When both resolve to the same (method, level), only the one at or above is
    returned.
    """
    if math.isnan(reference_ms):
        raise MatchingError("reference duration must be a number")

    ordered = sorted(observations, key=lambda o: o.mean_duration_ms)

    last_below: Observation | None = None
    for o in ordered:
        if o.mean_duration_ms <= reference_ms:
            last_below = o

    first_after = next((o for o in ordered if o.mean_duration_ms >= reference_ms), None)

    if (
        last_below is not None
        and first_after is not None
        and last_below.method == first_after.method
        and last_below.level == first_after.level
    ):
        return [first_after]

    return [o for o in (last_below, first_after) if o is not None]


def compute_closest_runs(
    observations: Iterable[Observation],
    reference_averages: Sequence[ReferenceAverage],
    *,
    reference_methods: Iterable[Method] = PLATFORM_NATIVE_METHODS,
) -> list[Observation]:
    """
    For every non-reference segment (method x platform) and every reference
    average, collect the closest observations from below and above.

    Each observation appears at most once, in order of first selection.
    """
    refs = frozenset(reference_methods)
    selected: dict[Observation, None] = {}

    for segment, runs in group_by_segment(observations).items():
        if segment.method in refs:
            continue
        for ref in reference_averages:
            for o in closest_runs(ref.mean_ms, runs):
                selected.setdefault(o, None)

    return list(selected)
