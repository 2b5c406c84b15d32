# mrprime/errors.py
from __future__ import annotations


class MillerRabinError(Exception):
    pass


class InvalidInput(MillerRabinError, ValueError):
    """Candidate n cannot be tested (too small, even, or not an integer)."""

    def __init__(self, n, reason: str):
        self.n = n
        self.reason = reason
        super().__init__(f"invalid input n={n!r}: {reason}")


class InvalidRange(MillerRabinError, ValueError):
    def __init__(self, low, high):
        self.low = low
        self.high = high
        super().__init__(f"invalid sampling range [{low}, {high}]")


class TrialTimeout(MillerRabinError, TimeoutError):
    """Concurrent trials did not drain within the wait bound."""

    def __init__(self, n: int, trials: int, completed: int, timeout_s: float):
        self.n = n
        self.trials = trials
        self.completed = completed
        self.timeout_s = timeout_s
        super().__init__(
            f"only {completed}/{trials} trials finished within {timeout_s}s for n={n}"
        )


class TaskFailure(MillerRabinError, RuntimeError):
    def __init__(self, n: int, trial: int, cause: BaseException):
        self.n = n
        self.trial = trial
        self.cause = cause
        super().__init__(f"trial {trial} for n={n} failed: {cause!r}")
