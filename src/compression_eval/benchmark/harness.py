from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from compression_eval.benchmark.results import TimedResult

logger = logging.getLogger(__name__)

# Monotonic clock in integer nanoseconds.
Clock = Callable[[], int]
CompressFn = Callable[[bytes], object]

_MS = 1_000_000


@dataclass(frozen=True)
class HarnessSettings:
    calibration_max_iterations: int = 5_000
    calibration_budget_ns: int = 500 * _MS
    target_duration_ns: int = 1_500 * _MS
    fast_min_iterations: int = 1_000
    max_iterations: int = 50_000

    def validate(self) -> None:
        if self.calibration_max_iterations < 1:
            raise ValueError("calibration_max_iterations must be >= 1")
        if self.calibration_budget_ns <= 0 or self.target_duration_ns <= 0:
            raise ValueError("time budgets must be > 0")
        if not 1 <= self.fast_min_iterations <= self.max_iterations:
            raise ValueError("require 1 <= fast_min_iterations <= max_iterations")


DEFAULT_SETTINGS = HarnessSettings()


@dataclass(frozen=True)
class Calibration:
    # 0 means every calibration iteration fit inside the budget.
    baseline_count: int
    elapsed_ns: int

    @property
    def exhausted(self) -> bool:
        return self.baseline_count == 0

    @property
    def approx_ns_per_iteration(self) -> float:
        # The sentinel divides by 1, so a fast function looks as slow as the
        # whole calibration loop. That keeps its count near fast_min_iterations.
        return self.elapsed_ns / max(1, self.baseline_count)


def calibrate(
    data: bytes,
    compress_fn: CompressFn,
    *,
    clock: Clock = time.perf_counter_ns,
    settings: HarnessSettings = DEFAULT_SETTINGS,
) -> Calibration:
    start = clock()
    baseline_count = 0
    for i in range(settings.calibration_max_iterations):
        compress_fn(data)
        if clock() - start > settings.calibration_budget_ns:
            baseline_count = i + 1
            break
    return Calibration(baseline_count=baseline_count, elapsed_ns=clock() - start)


def choose_iterations(calibration: Calibration, settings: HarnessSettings = DEFAULT_SETTINGS) -> int:
    """
    Pick the measured iteration count.

    A function that finished every calibration iteration inside the budget gets
    a floor of fast_min_iterations; anything slower gets a floor of 1.
    """
    min_iterations = settings.fast_min_iterations if calibration.exhausted else 1
    per_iteration = calibration.approx_ns_per_iteration
    if per_iteration <= 0:
        return settings.max_iterations

    target = int(settings.target_duration_ns / per_iteration)
    return min(settings.max_iterations, max(min_iterations, target))


def measure(
    data: bytes,
    compress_fn: CompressFn,
    *,
    clock: Clock = time.perf_counter_ns,
    settings: HarnessSettings = DEFAULT_SETTINGS,
) -> TimedResult:
    """
    Time `compress_fn(data)` and return the per-call duration.

    Errors raised by `compress_fn` propagate; no partial timing is reported.
    """
    if not data:
        raise ValueError("data must be non-empty")

    calibration = calibrate(data, compress_fn, clock=clock, settings=settings)
    iterations = choose_iterations(calibration, settings)
    logger.debug(
        "calibration: baseline_count=%d elapsed_ms=%.3f -> %d iterations",
        calibration.baseline_count,
        calibration.elapsed_ns / _MS,
        iterations,
    )

    start = clock()
    for _ in range(iterations):
        compress_fn(data)
    total_ns = max(0, clock() - start)

    return TimedResult(iteration_count=iterations, duration_s=total_ns / iterations / 1e9)
