from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from types import MappingProxyType

from compression_eval.benchmark.harness import DEFAULT_SETTINGS, Clock, HarnessSettings, measure
from compression_eval.benchmark.results import BenchmarkResults, TimedResult
from compression_eval.compressors import make_compressor
from compression_eval.methods import BenchmarkConfig

logger = logging.getLogger(__name__)


class CorpusRunner:
    """
    Runs the harness over every sample of a fixed corpus for one configuration.

    Pipeline per run:
    - Validate the configuration (level range)
    - Build the compressor adapter
    - Measure each sample in ascending name order
    - Collect name -> TimedResult into a BenchmarkResults

    A compressor error aborts the whole run.
    """

    def __init__(
        self,
        corpus: Mapping[str, bytes],
        *,
        settings: HarnessSettings = DEFAULT_SETTINGS,
        clock: Clock = time.perf_counter_ns,
    ) -> None:
        settings.validate()
        self._corpus = MappingProxyType(dict(corpus))
        self._settings = settings
        self._clock = clock

    @property
    def corpus(self) -> Mapping[str, bytes]:
        return self._corpus

    @property
    def sample_names(self) -> list[str]:
        return sorted(self._corpus)

    def run(self, config: BenchmarkConfig) -> BenchmarkResults | None:
        config.validate()

        if not self._corpus:
            logger.warning("No samples loaded; skipping %s", config.label())
            return None

        compressor = make_compressor(config.method, config.level)

        by_file: dict[str, TimedResult] = {}
        for name in self.sample_names:
            result = measure(
                self._corpus[name],
                compressor.compress,
                clock=self._clock,
                settings=self._settings,
            )
            logger.info(
                "%s %s: %.3f ms x %d",
                config.label(),
                name,
                result.duration_ms,
                result.iteration_count,
            )
            by_file[name] = result

        return BenchmarkResults(by_file=by_file)
