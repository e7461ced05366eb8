import logging
import os
import threading
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

FALLBACK_THREADS = 4


def interleaved_rows(height: int, threads: int, worker: int) -> range:
    """Rows owned by `worker`: worker, worker + threads, worker + 2*threads, ..."""
    return range(worker, height, threads)


def partition_rows(height: int, threads: int) -> List[range]:
    return [interleaved_rows(height, threads, worker) for worker in range(threads)]


def resolve_thread_count(requested: Optional[int] = None) -> int:
    if requested is not None:
        if requested < 1:
            raise ValueError(f"Thread count must be >= 1, got {requested}")
        return requested

    detected = os.cpu_count()
    if not detected:
        logger.info("Couldn't figure out the number of hardware threads. Defaulting to %d.", FALLBACK_THREADS)
        return FALLBACK_THREADS
    return detected


def run_partitioned(height: int, threads: int, work: Callable[[range], None]) -> None:
    """Run `work` on its own thread per worker and join them all.

    Exactly `threads` threads are started, named distbake-0 .. distbake-N-1,
    even when some of them own no rows. The first worker exception is
    re-raised after every thread has been joined.
    """
    errors: List[BaseException] = []

    def target(rows: range) -> None:
        try:
            work(rows)
        except Exception as exc:
            errors.append(exc)

    workers = [
        threading.Thread(target=target, args=(rows,), name=f"distbake-{worker}")
        for worker, rows in enumerate(partition_rows(height, threads))
    ]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()

    if errors:
        raise errors[0]
