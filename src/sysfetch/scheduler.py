"""
Module Scheduler

Runs the requested detectors either one after another or on a bounded
thread pool, and always returns one outcome per requested module in the
requested order.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence

from .detectors import BaseDetector, DetectionOutcome, ModuleKind
from .detectors.base_detector import describe_error
from .platform_probes import SystemContext
from .registry import create_detector

logger = logging.getLogger("sysfetch.scheduler")

DEFAULT_MAX_WORKERS = 8

DetectorFactory = Callable[[ModuleKind, Optional[SystemContext]], BaseDetector]


class ModuleScheduler:
    """
    Executes detectors for an ordered list of modules.

    Sequential mode runs every detector on the calling thread. Concurrent
    mode dispatches each detector to a thread pool of at most
    ``max_workers`` threads and reassembles results by request index, so
    both modes produce the same list.
    """

    def __init__(
        self,
        parallel: bool = True,
        max_workers: int = DEFAULT_MAX_WORKERS,
        detector_factory: DetectorFactory = create_detector,
        context: Optional[SystemContext] = None,
    ):
        """
        Initialize the scheduler.

        Args:
            parallel: Run detectors concurrently
            max_workers: Upper bound on pool size
            detector_factory: Builds a detector for a module kind
            context: System access shared (read-only) by all detectors
        """
        self.parallel = parallel
        self.max_workers = max(1, int(max_workers))
        self._factory = detector_factory
        self._context = context

    def run(self, kinds: Sequence[ModuleKind]) -> List[DetectionOutcome]:
        """
        Detect every requested module.

        Args:
            kinds: Modules in display order; duplicates are run once each

        Returns:
            Outcomes aligned 1:1 with ``kinds``
        """
        kinds = list(kinds)
        if not kinds:
            return []

        start = time.perf_counter()
        if self.parallel and len(kinds) > 1:
            mode = "concurrent"
            outcomes = self._run_concurrent(kinds)
        else:
            mode = "sequential"
            outcomes = [self._run_one(kind) for kind in kinds]

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"Detected {len(kinds)} modules ({mode}) in {elapsed_ms:.1f} ms")
        return outcomes

    def _run_concurrent(self, kinds: List[ModuleKind]) -> List[DetectionOutcome]:
        workers = min(len(kinds), self.max_workers)
        results: Dict[int, DetectionOutcome] = {}

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sysfetch") as executor:
            futures = {
                executor.submit(self._run_one, kind): index
                for index, kind in enumerate(kinds)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        return [results[index] for index in range(len(kinds))]

    def _run_one(self, kind: ModuleKind) -> DetectionOutcome:
        """Run a single detector; nothing it raises escapes this call."""
        start = time.perf_counter()
        try:
            outcome = self._factory(kind, self._context).detect()
        except Exception as e:
            logger.debug(f"Unexpected error detecting {kind}: {e!r}")
            outcome = DetectionOutcome.failed(kind, describe_error(e))

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{kind}: {outcome.status.value} in {elapsed_ms:.1f} ms")
        return outcome
