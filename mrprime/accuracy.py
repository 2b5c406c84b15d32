# mrprime/accuracy.py
# Cross-check both engines against sympy on random primes, semiprimes and odd composites.

from __future__ import annotations
import csv, random
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Tuple

from sympy import isprime, nextprime

from .engine import is_probable_prime, is_probable_prime_concurrent
from .sampler import RandomSampler

FIELDS = ["n", "digits", "expect", "serial", "concurrent", "ok", "reason"]


def rand_k_digit_prime(k: int, rng: random.Random) -> int:
    lo = max(3, 10**(k-1))
    hi = 10**k - 1
    while True:
        p = int(nextprime(rng.randrange(lo - 1, hi)))
        if p <= hi:
            return p

def rand_semiprime(k: int, rng: random.Random) -> int:
    k1 = max(1, k//2)
    k2 = max(1, k - k1)
    return rand_k_digit_prime(k1, rng) * rand_k_digit_prime(k2, rng)

def rand_odd_composite(k: int, rng: random.Random) -> int:
    while True:
        n = rng.randrange(10**(k-1), 10**k) | 1
        if n > 3 and not isprime(n):
            return n

def build_cases(seed: int = 42) -> List[Tuple[int, str]]:
    rng = random.Random(seed)
    jobs: List[Tuple[int, str]] = [(97, "prime"), (91, "composite"), (561, "composite"),
                                   (3, "prime"), (9, "composite")]
    for k in [2, 3, 4, 6, 9, 12, 16, 24, 40]:
        for _ in range(3):
            jobs.append((rand_k_digit_prime(k, rng), "prime"))
        for _ in range(2):
            jobs.append((rand_semiprime(k, rng), "composite"))
        for _ in range(2):
            jobs.append((rand_odd_composite(k, rng), "composite"))
    return jobs

def run_case(n: int, expect: str, trials: int = 20, workers: int = 4,
             sampler: Optional[RandomSampler] = None) -> dict:
    serial = is_probable_prime(n, trials, sampler=sampler)
    conc = is_probable_prime_concurrent(n, trials, workers, sampler=sampler)
    want = expect == "prime"
    reasons = []
    if serial != want:
        reasons.append(f"serial says {serial}")
    if conc != want:
        reasons.append(f"concurrent says {conc}")
    return {
        "n": str(n),
        "digits": len(str(n)),
        "expect": expect,
        "serial": serial,
        "concurrent": conc,
        "ok": not reasons,
        "reason": "; ".join(reasons),
    }

def run_suite(seed: int = 42, trials: int = 20, workers: int = 4,
              parallel: int = 8, out: Optional[str] = None) -> dict:
    """Run every case; returns a summary and writes failing rows to `out` as CSV."""
    jobs = build_cases(seed)
    sampler = RandomSampler(seed=seed)
    results = []
    with ThreadPoolExecutor(max_workers=parallel) as ex:
        futs = {ex.submit(run_case, n, tag, trials, workers, sampler): (n, tag) for n, tag in jobs}
        for fut in as_completed(futs):
            n, tag = futs[fut]
            try:
                results.append(fut.result())
            except Exception as e:
                results.append({"n": str(n), "digits": len(str(n)), "expect": tag,
                                "serial": None, "concurrent": None, "ok": False,
                                "reason": f"exception: {e}"})

    by = {}
    for r in results:
        by.setdefault(r["expect"], [0, 0])
        by[r["expect"]][0 if r["ok"] else 1] += 1
    fails = [r for r in results if not r["ok"]]
    if fails and out:
        with open(out, "w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=FIELDS)
            w.writeheader()
            w.writerows(fails)
    return {"total": len(results), "passed": len(results) - len(fails), "by_expect": by, "failures": fails}
