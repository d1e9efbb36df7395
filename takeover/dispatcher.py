"""Bounded worker pool that runs the detection pipeline over many targets."""

import logging
import queue
import threading
from typing import Callable, Iterable, List, Optional

from .models import ScanOutcome
from .pipeline import DetectionPipeline

logger = logging.getLogger(__name__)

EXTRA_QUEUE_CAPACITY = 5

_STOP = object()


class _WorkerDone:
    def __init__(self, error: Optional[BaseException] = None):
        self.error = error


class Dispatcher:
    """
    Fan targets out to a fixed number of worker threads and fan their
    outcomes back in.

    A feeder thread fills the bounded work queue and then posts one stop
    marker per worker. Each worker posts a done marker when it exits, so the
    aggregator (the calling thread) knows every outcome has arrived once it
    has seen ``concurrency`` of them.
    """

    def __init__(self, pipeline: DetectionPipeline, concurrency: int = 10):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.pipeline = pipeline
        self.concurrency = concurrency

    def run(
        self,
        targets: Iterable[str],
        only_vulnerable: bool = False,
        on_outcome: Callable[[ScanOutcome], None] = None,
    ) -> List[ScanOutcome]:
        """
        Scan every target exactly once.

        Args:
            targets: Target strings; blank entries are skipped
            only_vulnerable: Keep only VULNERABLE outcomes in the result
            on_outcome: Called in the aggregator thread for every outcome

        Returns:
            Outcomes in arrival order
        """
        work: queue.Queue = queue.Queue(maxsize=self.concurrency + EXTRA_QUEUE_CAPACITY)
        results: queue.Queue = queue.Queue(maxsize=self.concurrency)

        feed_errors: List[BaseException] = []
        feeder = threading.Thread(target=self._feed, args=(targets, work, feed_errors), daemon=True)
        workers = [
            threading.Thread(target=self._work, args=(work, results), name=f"takeover-worker-{i}", daemon=True)
            for i in range(self.concurrency)
        ]

        feeder.start()
        for worker in workers:
            worker.start()

        collected: List[ScanOutcome] = []
        errors: List[BaseException] = []
        running = self.concurrency
        while running:
            item = results.get()
            if isinstance(item, _WorkerDone):
                running -= 1
                if item.error is not None:
                    errors.append(item.error)
                continue
            if on_outcome:
                on_outcome(item)
            if only_vulnerable and not item.vulnerable:
                continue
            collected.append(item)

        feeder.join()
        for worker in workers:
            worker.join()

        # A broken target source comes first: targets after it were never queued.
        errors = feed_errors + errors
        if errors:
            raise errors[0]

        logger.info("Dispatcher finished: %d outcome(s) kept", len(collected))
        return collected

    def _feed(self, targets: Iterable[str], work: queue.Queue, errors: List[BaseException]):
        try:
            for target in targets:
                target = target.strip()
                if target:
                    work.put(target)
        except Exception as e:
            logger.error("Target source failed: %s", e)
            errors.append(e)
        finally:
            for _ in range(self.concurrency):
                work.put(_STOP)

    def _work(self, work: queue.Queue, results: queue.Queue):
        error = None
        try:
            while True:
                target = work.get()
                if target is _STOP:
                    break
                results.put(self.pipeline.run(target))
        except Exception as e:
            logger.exception("Worker %s failed", threading.current_thread().name)
            error = e
            # Keep draining so the feeder never blocks on a full queue.
            while work.get() is not _STOP:
                pass
        results.put(_WorkerDone(error))
