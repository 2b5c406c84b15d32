# mrprime/engine.py
# Serial and concurrent Miller–Rabin engines.
# - SerialEngine: trials in order, stops at the first witness
# - ConcurrentEngine: every trial on a fixed-size pool, wait for all, AND the verdicts

from __future__ import annotations
import logging, time
import concurrent.futures
from typing import List, Optional

from .errors import TaskFailure, TrialTimeout
from .sampler import RandomSampler, default_sampler
from .witness import base_range, decompose, evaluate_trial

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0
POOL_KINDS = ("thread", "process")


def _check_trials(trials: int) -> None:
    if isinstance(trials, bool) or not isinstance(trials, int) or trials < 1:
        raise ValueError(f"trials must be a positive integer, got {trials!r}")


# ---------- Serial ----------

class SerialEngine:
    def __init__(self, sampler: Optional[RandomSampler] = None):
        self.sampler = sampler or default_sampler()

    def is_probable_prime(self, n: int, trials: int) -> bool:
        """False as soon as one base proves n composite; True if all trials pass."""
        dec = decompose(n)
        _check_trials(trials)
        low, high = base_range(n)
        if low > high:
            return True  # n == 3: no base to try, and 3 is prime
        for i in range(trials):
            a = self.sampler.uniform(low, high)
            if evaluate_trial(n, dec.d, dec.s, a):
                logger.debug("n=%d: witness a=%d at trial %d", n, a, i)
                return False
        return True


# ---------- Concurrent ----------

def _sample_and_evaluate(sampler: RandomSampler, n: int, d: int, s: int) -> bool:
    low, high = base_range(n)
    a = sampler.uniform(low, high)
    return evaluate_trial(n, d, s, a)


class ConcurrentEngine:
    """
    Runs `trials` independent rounds on a pool of `workers` and waits for all
    of them before folding. There is no early exit on a witness, so latency on
    a composite is that of the slowest round.

    pool="thread" samples each base inside its task. pool="process" samples the
    bases up front and ships (n, d, s, a) to worker processes, which sidesteps
    the GIL for very large n.

    The pool lives for one call. On timeout queued rounds are cancelled, running
    ones are abandoned, the pool is shut down without waiting, and TrialTimeout
    is raised.
    """

    def __init__(self, workers: int, timeout_s: float = DEFAULT_TIMEOUT_S,
                 sampler: Optional[RandomSampler] = None, pool: str = "thread"):
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ValueError(f"workers must be a positive integer, got {workers!r}")
        if pool not in POOL_KINDS:
            raise ValueError(f"pool must be one of {POOL_KINDS}, got {pool!r}")
        self.workers = workers
        self.timeout_s = timeout_s
        self.sampler = sampler or default_sampler()
        self.pool = pool

    def _executor(self) -> concurrent.futures.Executor:
        if self.pool == "process":
            return concurrent.futures.ProcessPoolExecutor(max_workers=self.workers)
        return concurrent.futures.ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="mr-trial")

    def _submit(self, executor, n: int, d: int, s: int, trials: int) -> List[concurrent.futures.Future]:
        if self.pool == "process":
            low, high = base_range(n)
            bases = []
            for i in range(trials):
                try:
                    bases.append(self.sampler.uniform(low, high))
                except Exception as exc:
                    logger.error("n=%d: drawing base for trial %d raised %r", n, i, exc)
                    raise TaskFailure(n, i, exc) from exc
            return [executor.submit(evaluate_trial, n, d, s, a) for a in bases]
        return [executor.submit(_sample_and_evaluate, self.sampler, n, d, s)
                for _ in range(trials)]

    def is_probable_prime(self, n: int, trials: int) -> bool:
        dec = decompose(n)
        _check_trials(trials)
        low, high = base_range(n)
        if low > high:
            return True
        logger.debug("n=%d bits=%d: %d trials on %d %s workers",
                     n, n.bit_length(), trials, self.workers, self.pool)

        executor = self._executor()
        abandoned = False
        try:
            futures = self._submit(executor, n, dec.d, dec.s, trials)
            done, not_done = concurrent.futures.wait(futures, timeout=self.timeout_s)
            if not_done:
                abandoned = True
                for f in not_done:
                    f.cancel()
                logger.warning("n=%d: %d/%d trials still pending after %ss, abandoning",
                               n, len(not_done), trials, self.timeout_s)
                raise TrialTimeout(n, trials, len(done), self.timeout_s)

            verdicts = []
            for i, f in enumerate(futures):
                exc = f.exception()
                if exc is not None:
                    logger.error("n=%d: trial %d raised %r", n, i, exc)
                    raise TaskFailure(n, i, exc) from exc
                verdicts.append(f.result())
        finally:
            executor.shutdown(wait=not abandoned, cancel_futures=True)

        return not any(verdicts)


# ---------- Function surface ----------

def is_probable_prime(n: int, trials: int = 10, sampler: Optional[RandomSampler] = None) -> bool:
    return SerialEngine(sampler).is_probable_prime(n, trials)

def is_probable_prime_concurrent(n: int, trials: int = 10, workers: int = 4,
                                 timeout_s: float = DEFAULT_TIMEOUT_S,
                                 sampler: Optional[RandomSampler] = None,
                                 pool: str = "thread") -> bool:
    engine = ConcurrentEngine(workers, timeout_s=timeout_s, sampler=sampler, pool=pool)
    return engine.is_probable_prime(n, trials)


def timed(fn, *args, **kwargs):
    """Call fn and return (result, elapsed_ms)."""
    t0 = time.perf_counter()
    res = fn(*args, **kwargs)
    return res, (time.perf_counter() - t0) * 1000.0
