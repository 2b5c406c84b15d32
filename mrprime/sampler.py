# mrprime/sampler.py
# Uniform integer sampling by rejection, shared safely between trial tasks.

from __future__ import annotations
import random, threading
from typing import Optional

from .errors import InvalidRange


class RandomSampler:
    """
    Draws uniform integers from a closed range [low, high].

    Candidates are taken with as many random bits as `high` has and rejected
    until one lands in range, so there is no modulo bias. The generator is
    owned by the sampler and guarded by a lock, so one instance can serve
    every worker of a concurrent engine. Pass `seed` (or an `rng`) for
    reproducible runs.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        if rng is None:
            rng = random.Random(seed)
        self._rng = rng
        self._lock = threading.Lock()

    def uniform(self, low: int, high: int) -> int:
        if low < 0 or high < 0 or low > high:
            raise InvalidRange(low, high)
        bits = high.bit_length()
        while True:
            with self._lock:
                x = self._rng.getrandbits(bits)
            if low <= x <= high:
                return x


_default: Optional[RandomSampler] = None
_default_lock = threading.Lock()

def default_sampler() -> RandomSampler:
    """Process-wide sampler seeded from OS entropy."""
    global _default
    with _default_lock:
        if _default is None:
            _default = RandomSampler()
        return _default

def uniform(low: int, high: int) -> int:
    return default_sampler().uniform(low, high)
