import threading

import pytest


class FixedSampler:
    """Hands out a fixed list of bases, each exactly once, from any thread."""

    def __init__(self, bases):
        self._bases = list(bases)
        self._lock = threading.Lock()
        self.calls = 0

    def uniform(self, low, high):
        with self._lock:
            self.calls += 1
            a = self._bases.pop(0)
        assert low <= a <= high
        return a


class BlockingSampler:
    """Blocks every draw until `release` is set."""

    def __init__(self):
        self.release = threading.Event()
        self.entered = 0

    def uniform(self, low, high):
        self.entered += 1
        self.release.wait(10)
        return low


class ExplodingSampler:
    def __init__(self, exc=ArithmeticError("boom")):
        self.exc = exc

    def uniform(self, low, high):
        raise self.exc


class UntouchableSampler:
    def uniform(self, low, high):
        raise AssertionError("sampler must not be used")


@pytest.fixture
def blocking_sampler():
    s = BlockingSampler()
    yield s
    s.release.set()
