from .engine import (
    ConcurrentEngine,
    SerialEngine,
    is_probable_prime,
    is_probable_prime_concurrent,
)
from .errors import InvalidInput, InvalidRange, MillerRabinError, TaskFailure, TrialTimeout
from .sampler import RandomSampler
from .witness import Decomposition, decompose, evaluate_trial

__all__ = [
    "ConcurrentEngine", "SerialEngine", "is_probable_prime", "is_probable_prime_concurrent",
    "InvalidInput", "InvalidRange", "MillerRabinError", "TaskFailure", "TrialTimeout",
    "RandomSampler", "Decomposition", "decompose", "evaluate_trial",
]
