from .historical import HISTORICAL_RUNS_TSV, historical_observations
from .matching import (
    MatchingError,
    ReferenceAverage,
    closest_runs,
    compute_closest_runs,
    compute_reference_averages,
)
from .observations import Observation, Platform, Segment, parse_observations

__all__ = [
    "HISTORICAL_RUNS_TSV",
    "historical_observations",
    "MatchingError",
    "ReferenceAverage",
    "closest_runs",
    "compute_closest_runs",
    "compute_reference_averages",
    "Observation",
    "Platform",
    "Segment",
    "parse_observations",
]
