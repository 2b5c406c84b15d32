# mrprime/witness.py
# Miller–Rabin core: input checks, n-1 = 2^s * d, and the single-base witness test.

from __future__ import annotations
from dataclasses import dataclass

try:
    import gmpy2
    HAVE_GMPY2 = True
    def _powmod(a, e, n): return int(gmpy2.powmod(a, e, n))
except ImportError:
    HAVE_GMPY2 = False
    def _powmod(a, e, n): return pow(a, e, n)

from .errors import InvalidInput

MIN_CANDIDATE = 3


@dataclass(frozen=True)
class Decomposition:
    s: int
    d: int


def validate(n) -> None:
    """Fail fast on anything the test cannot run on."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidInput(n, "must be an integer")
    if n < MIN_CANDIDATE:
        raise InvalidInput(n, f"must be >= {MIN_CANDIDATE}")
    if n % 2 == 0:
        raise InvalidInput(n, "must be odd")


def decompose(n: int) -> Decomposition:
    """Return (s, d) with n - 1 == 2**s * d and d odd."""
    validate(n)
    d = n - 1
    s = (d & -d).bit_length() - 1  # trailing zero bits of n-1
    d >>= s
    return Decomposition(s=s, d=d)


def base_range(n: int) -> tuple[int, int]:
    """Closed range bases are drawn from; empty (low > high) only for n == 3."""
    return 2, n - 2


def evaluate_trial(n: int, d: int, s: int, a: int) -> bool:
    """
    One strong Miller–Rabin round. Returns True if `a` is a witness,
    i.e. n is proven composite; False if the round is inconclusive.
    """
    n_1 = n - 1
    x = _powmod(a, d, n)
    if x == 1 or x == n_1:
        return False
    for _ in range(s - 1):
        x = (x * x) % n
        if x == 1:
            return True
        if x == n_1:
            return False
    return True
