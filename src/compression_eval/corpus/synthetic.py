from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

import numpy as np

from compression_eval.corpus.loader import SAMPLE_NAMES

CSV_HEADER = "millisecond delta,milligram delta"

# Aug 2023, when the reference recordings were taken.
_EPOCH_MS = 1_692_000_000_000
_DAY_MS = 86_400_000


def _brew_curve(rng: np.random.Generator, n_points: int) -> tuple[np.ndarray, np.ndarray]:
    """
    One simulated brew: a scale sampled every ~100 ms while water is poured.

    Returns absolute timestamps (ms) and weights (mg, 0.1 g scale resolution).
    """
    dt = rng.integers(90, 111, size=n_points, dtype=np.int64)
    dt[0] = 0
    times = _EPOCH_MS + int(rng.integers(0, _DAY_MS)) + np.cumsum(dt)

    final_g = float(rng.uniform(250.0, 400.0))
    progress = np.linspace(0.0, 1.0, n_points)
    grams = final_g * (1.0 - np.exp(-4.0 * progress)) / (1.0 - np.exp(-4.0))
    grams = grams + rng.normal(0.0, 0.05, size=n_points)
    weights = (np.round(grams, 1) * 1000).astype(np.int64)
    return times, weights


def encode_delta_csv(times_ms: np.ndarray, values_mg: np.ndarray) -> bytes:
    """First row is absolute, later rows are deltas from the previous point."""
    if len(times_ms) != len(values_mg):
        raise ValueError("times and values must have the same length")
    if len(times_ms) == 0:
        raise ValueError("recording must have at least one point")

    dts = np.diff(times_ms, prepend=0)
    dvs = np.diff(values_mg, prepend=0)
    lines = [CSV_HEADER]
    lines.extend(f"{int(t)},{int(v)}" for t, v in zip(dts, dvs))
    return "\n".join(lines).encode("utf-8")


def generate_recording(seed: int, *, points: int = 2_000) -> bytes:
    if points < 1:
        raise ValueError("points must be >= 1")
    rng = np.random.default_rng(seed)
    times, weights = _brew_curve(rng, points)
    return encode_delta_csv(times, weights)


def synthetic_corpus(
    seed: int = 0,
    *,
    points: int = 2_000,
    names: Iterable[str] = SAMPLE_NAMES,
) -> Mapping[str, bytes]:
    # Each sample gets its own stream so adding names keeps earlier ones stable.
    return MappingProxyType(
        {name: generate_recording(seed + i, points=points) for i, name in enumerate(names)}
    )


def write_synthetic_corpus(
    out_dir: Path,
    *,
    seed: int = 0,
    points: int = 2_000,
    names: Iterable[str] = SAMPLE_NAMES,
) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, data in synthetic_corpus(seed, points=points, names=names).items():
        p = out_dir / f"{name}.csv"
        p.write_bytes(data)
        written.append(p)
    return written
