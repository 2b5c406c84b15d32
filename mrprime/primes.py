# mrprime/primes.py
# Reference primes for benchmarks and tests: the first 28 Mersenne primes 2^p - 1.

MERSENNE_EXPONENTS = (
    2, 3, 5, 7, 13, 17, 19, 31, 61, 89,
    107, 127, 521, 607, 1279, 2203, 2281, 3217, 4253, 4423,
    9689, 9941, 11213, 19937, 21701, 23209, 44497, 86243,
)

# Mersenne 15..23: 1279 to 11213 bits, seconds rather than minutes per run
DEFAULT_INDICES = tuple(range(15, 24))


def mersenne_exponent(k: int) -> int:
    """Exponent p of the k-th Mersenne prime (1-based)."""
    if not 1 <= k <= len(MERSENNE_EXPONENTS):
        raise ValueError(f"only Mersenne primes 1..{len(MERSENNE_EXPONENTS)} are tabulated, got {k}")
    return MERSENNE_EXPONENTS[k - 1]

def mersenne(k: int) -> int:
    return (1 << mersenne_exponent(k)) - 1

def mersenne_label(k: int) -> str:
    return f"Mersenne {k}"

def parse_candidate(text: str) -> tuple[str, int]:
    """
    Accept a decimal integer or 'M<k>' for the k-th Mersenne prime.
    Returns (label, n).
    """
    t = text.strip()
    if t[:1] in ("M", "m") and t[1:].isdigit():
        k = int(t[1:])
        return mersenne_label(k), mersenne(k)
    n = int(t, 10)
    return t, n
