"""
Tests for Module Scheduler

Covers:
    - Order preservation in sequential and concurrent modes
    - Out-of-order completion
    - Failure isolation
    - Worker bound
"""

import itertools
import logging
import threading
import time
from dataclasses import dataclass

import pytest

from sysfetch.detectors import DetectionOutcome, DetectionStatus, ModuleInfo, ModuleKind
from sysfetch.scheduler import ModuleScheduler


@dataclass(frozen=True)
class FakeInfo(ModuleInfo):
    kind: ModuleKind
    value: str


class FakeDetector:
    """Detector double that sleeps, then returns or raises."""

    def __init__(self, kind, delay=0.0, error=None, tracker=None):
        self.kind = kind
        self.delay = delay
        self.error = error
        self.tracker = tracker

    def detect(self):
        if self.tracker is not None:
            self.tracker.enter()
        try:
            time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return DetectionOutcome.present(FakeInfo(self.kind, f"{self.kind.identifier}-info"))
        finally:
            if self.tracker is not None:
                self.tracker.leave()


class ConcurrencyTracker:
    """Records the peak number of detectors running at once."""

    def __init__(self):
        self._lock = threading.Lock()
        self.active = 0
        self.peak = 0

    def enter(self):
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)

    def leave(self):
        with self._lock:
            self.active -= 1


def make_factory(delays=None, errors=None, tracker=None):
    delays = delays or {}
    errors = errors or {}

    def factory(kind, context):
        return FakeDetector(kind, delays.get(kind, 0.0), errors.get(kind), tracker)

    return factory


@pytest.fixture(params=[True, False], ids=["concurrent", "sequential"])
def parallel(request):
    return request.param


class TestOrdering:
    """Tests for result order."""

    def test_empty_request(self, parallel):
        """Test empty request returns no outcomes."""
        assert ModuleScheduler(parallel=parallel, detector_factory=make_factory()).run([]) == []

    def test_single_module(self, parallel):
        """Test single module."""
        scheduler = ModuleScheduler(parallel=parallel, detector_factory=make_factory())
        outcomes = scheduler.run([ModuleKind.CPU])
        assert [o.kind for o in outcomes] == [ModuleKind.CPU]

    @pytest.mark.parametrize(
        "kinds",
        list(itertools.permutations([ModuleKind.OS, ModuleKind.KERNEL, ModuleKind.CPU])),
    )
    def test_every_permutation(self, kinds, parallel):
        """Test order is preserved for every permutation."""
        scheduler = ModuleScheduler(parallel=parallel, detector_factory=make_factory())
        assert [o.kind for o in scheduler.run(kinds)] == list(kinds)

    def test_slow_first_module(self):
        """Test slow first module still comes first."""
        delays = {ModuleKind.OS: 0.2, ModuleKind.KERNEL: 0.0, ModuleKind.MEMORY: 0.05}
        scheduler = ModuleScheduler(parallel=True, detector_factory=make_factory(delays))

        outcomes = scheduler.run([ModuleKind.OS, ModuleKind.KERNEL, ModuleKind.MEMORY])

        assert [o.kind for o in outcomes] == [ModuleKind.OS, ModuleKind.KERNEL, ModuleKind.MEMORY]
        assert [o.info.value for o in outcomes] == ["os-info", "kernel-info", "memory-info"]

    def test_modes_agree(self):
        """Test sequential and concurrent modes produce identical results."""
        kinds = [ModuleKind.MEMORY, ModuleKind.OS, ModuleKind.SHELL, ModuleKind.OS]
        delays = {ModuleKind.MEMORY: 0.05}
        errors = {ModuleKind.SHELL: OSError("boom")}

        concurrent = ModuleScheduler(True, detector_factory=make_factory(delays, errors)).run(kinds)
        sequential = ModuleScheduler(False, detector_factory=make_factory(delays, errors)).run(kinds)

        assert concurrent == sequential

    def test_duplicates_run_each_time(self, parallel):
        """Test duplicates run each time."""
        calls = []

        def factory(kind, context):
            calls.append(kind)
            return FakeDetector(kind)

        scheduler = ModuleScheduler(parallel=parallel, detector_factory=factory)
        outcomes = scheduler.run([ModuleKind.CPU, ModuleKind.CPU])

        assert len(outcomes) == 2
        assert calls == [ModuleKind.CPU, ModuleKind.CPU]


class TestFailureIsolation:
    """Tests that one failing module never affects the others."""

    def test_middle_module_fails(self, parallel):
        """Test failing module leaves its neighbours intact."""
        errors = {ModuleKind.KERNEL: RuntimeError("uname exploded")}
        scheduler = ModuleScheduler(parallel=parallel, detector_factory=make_factory(errors=errors))

        outcomes = scheduler.run([ModuleKind.OS, ModuleKind.KERNEL, ModuleKind.CPU])

        assert [o.status for o in outcomes] == [
            DetectionStatus.PRESENT, DetectionStatus.FAILED, DetectionStatus.PRESENT,
        ]
        assert outcomes[1].error == "uname exploded"

    def test_factory_error_becomes_failure(self, parallel):
        """Test factory error becomes failure."""
        def factory(kind, context):
            if kind is ModuleKind.HOST:
                raise ValueError("cannot build")
            return FakeDetector(kind)

        scheduler = ModuleScheduler(parallel=parallel, detector_factory=factory)
        outcomes = scheduler.run([ModuleKind.HOST, ModuleKind.OS])

        assert outcomes[0].is_failed
        assert outcomes[0].kind is ModuleKind.HOST
        assert outcomes[1].is_present

    def test_all_fail(self, parallel):
        """Test all modules failing."""
        errors = {kind: OSError("nope") for kind in ModuleKind}
        scheduler = ModuleScheduler(parallel=parallel, detector_factory=make_factory(errors=errors))

        outcomes = scheduler.run(list(ModuleKind))

        assert all(o.is_failed for o in outcomes)
        assert [o.kind for o in outcomes] == list(ModuleKind)


class TestConcurrency:
    """Tests for pool behavior."""

    def test_runs_in_parallel(self):
        """Test detectors overlap in concurrent mode."""
        tracker = ConcurrencyTracker()
        delays = {kind: 0.1 for kind in ModuleKind}
        scheduler = ModuleScheduler(
            parallel=True,
            detector_factory=make_factory(delays, tracker=tracker),
        )

        scheduler.run([ModuleKind.OS, ModuleKind.CPU, ModuleKind.MEMORY])

        assert tracker.peak > 1

    def test_max_workers_bound(self):
        """Test pool never exceeds max_workers."""
        tracker = ConcurrencyTracker()
        delays = {kind: 0.05 for kind in ModuleKind}
        scheduler = ModuleScheduler(
            parallel=True,
            max_workers=2,
            detector_factory=make_factory(delays, tracker=tracker),
        )

        outcomes = scheduler.run(list(ModuleKind))

        assert len(outcomes) == len(ModuleKind)
        assert tracker.peak <= 2

    def test_sequential_runs_on_calling_thread(self):
        """Test sequential runs on calling thread."""
        threads = set()

        def factory(kind, context):
            threads.add(threading.get_ident())
            return FakeDetector(kind)

        ModuleScheduler(parallel=False, detector_factory=factory).run(list(ModuleKind))

        assert threads == {threading.get_ident()}

    def test_max_workers_floor(self):
        """Test max_workers is at least one."""
        assert ModuleScheduler(max_workers=0).max_workers == 1

    def test_context_passed_to_factory(self):
        """Test context passed to factory."""
        seen = []
        sentinel = object()

        def factory(kind, context):
            seen.append(context)
            return FakeDetector(kind)

        ModuleScheduler(parallel=True, detector_factory=factory, context=sentinel).run(
            [ModuleKind.OS, ModuleKind.CPU]
        )

        assert seen == [sentinel, sentinel]


class TestTimingLog:
    """Tests for the debug timing summary."""

    @pytest.fixture
    def scheduler_log(self, caplog):
        logger = logging.getLogger("sysfetch")
        logger.addHandler(caplog.handler)
        try:
            with caplog.at_level(logging.DEBUG, logger="sysfetch"):
                yield caplog
        finally:
            logger.removeHandler(caplog.handler)

    def test_single_module_logged_as_sequential(self, scheduler_log):
        """Test a lone module runs inline and is reported as sequential."""
        ModuleScheduler(parallel=True, detector_factory=make_factory()).run([ModuleKind.OS])
        assert "Detected 1 modules (sequential)" in scheduler_log.text

    def test_concurrent_run_logged(self, scheduler_log):
        """Test a pooled run is reported as concurrent."""
        ModuleScheduler(parallel=True, detector_factory=make_factory()).run(
            [ModuleKind.OS, ModuleKind.CPU]
        )
        assert "Detected 2 modules (concurrent)" in scheduler_log.text

    def test_no_parallel_logged(self, scheduler_log):
        """Test sequential mode is reported as sequential."""
        ModuleScheduler(parallel=False, detector_factory=make_factory()).run(
            [ModuleKind.OS, ModuleKind.CPU]
        )
        assert "Detected 2 modules (sequential)" in scheduler_log.text
