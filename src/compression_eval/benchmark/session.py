from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from compression_eval.benchmark.results import BenchmarkResults
from compression_eval.benchmark.runner import CorpusRunner
from compression_eval.methods import BenchmarkConfig, Priority

logger = logging.getLogger(__name__)


def _apply_priority(priority: Priority) -> None:
    increment = priority.nice_increment
    if increment <= 0 or not hasattr(os, "nice"):
        return
    try:
        os.nice(increment)
    except OSError as e:
        logger.warning("Could not lower priority for %s workers: %s", priority, e)
    else:
        logger.debug("Worker for %s running at nice +%d", priority, increment)


class BenchmarkSession:
    """
    Dispatches runs onto one background worker per priority class and caches
    completed results by configuration.

    At most one run per configuration is in flight; submitting the same
    configuration again returns the pending future.
    """

    def __init__(self, runner: CorpusRunner) -> None:
        self._runner = runner
        self._lock = threading.Lock()
        self._executors: dict[Priority, ThreadPoolExecutor] = {}
        self._in_flight: dict[BenchmarkConfig, Future[BenchmarkResults | None]] = {}
        self._results: dict[BenchmarkConfig, BenchmarkResults | None] = {}
        self._closed = False

    def __enter__(self) -> BenchmarkSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _executor_for(self, priority: Priority) -> ThreadPoolExecutor:
        ex = self._executors.get(priority)
        if ex is None:
            ex = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix=f"bench-{priority.value}",
                initializer=_apply_priority,
                initargs=(priority,),
            )
            self._executors[priority] = ex
        return ex

    def submit(self, config: BenchmarkConfig) -> Future[BenchmarkResults | None]:
        # Fail before dispatch so a bad level never reaches a worker.
        config.validate()

        with self._lock:
            if self._closed:
                raise RuntimeError("session is closed")

            pending = self._in_flight.get(config)
            if pending is not None:
                return pending

            self._results.pop(config, None)
            fut = self._executor_for(config.priority).submit(self._run, config)
            self._in_flight[config] = fut
        return fut

    def _run(self, config: BenchmarkConfig) -> BenchmarkResults | None:
        # Cache is updated before the future resolves.
        try:
            results = self._runner.run(config)
        except Exception as e:
            logger.error("Run %s failed: %s", config.label(), e)
            with self._lock:
                self._in_flight.pop(config, None)
            raise
        with self._lock:
            self._in_flight.pop(config, None)
            self._results[config] = results
        return results

    def results(self, config: BenchmarkConfig) -> BenchmarkResults | None:
        with self._lock:
            return self._results.get(config)

    def is_running(self, config: BenchmarkConfig) -> bool:
        with self._lock:
            return config in self._in_flight

    def close(self, *, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
            executors = list(self._executors.values())
            self._executors.clear()
        for ex in executors:
            ex.shutdown(wait=wait)
