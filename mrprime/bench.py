# mrprime/bench.py
# Timing harness: runs the engines on reference primes and renders plain-text records.

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .engine import ConcurrentEngine, SerialEngine, timed
from .primes import DEFAULT_INDICES, mersenne, mersenne_label


@dataclass
class SingleResult:
    duration_ms: int
    probably_prime: bool

@dataclass
class TestRecord:
    __test__ = False  # not a pytest class

    label: str
    duration_ms: int
    probably_prime: bool


def _engine(workers: Optional[int], timeout_s: Optional[float]):
    if workers is None:
        return SerialEngine()
    if timeout_s is None:
        return ConcurrentEngine(workers)
    return ConcurrentEngine(workers, timeout_s=timeout_s)

def run_single(n: int, trials: int, workers: Optional[int] = None,
               timeout_s: Optional[float] = None) -> SingleResult:
    """Time one test; serial when workers is None, else concurrent."""
    engine = _engine(workers, timeout_s)
    ok, ms = timed(engine.is_probable_prime, n, trials)
    return SingleResult(duration_ms=int(ms), probably_prime=ok)

def run_full(trials: int, workers: Optional[int] = None,
             indices: Iterable[int] = DEFAULT_INDICES,
             timeout_s: Optional[float] = None, progress=None) -> List[TestRecord]:
    records = []
    for i, k in enumerate(indices, 1):
        if progress:
            progress(i, k)
        res = run_single(mersenne(k), trials, workers, timeout_s)
        records.append(TestRecord(mersenne_label(k), res.duration_ms, res.probably_prime))
    return records


# ---------- Text rendering ----------

def header_lines(trials: int, workers: Optional[int] = None) -> List[str]:
    if workers is None:
        return ["Tests done by the serial implementation.",
                f"Number of trials per test: {trials}"]
    return ["Tests done by the threaded implementation.",
            f"Number of threads used: {workers}",
            f"Number of trials per test: {trials}"]

def format_record(rec: TestRecord) -> str:
    return f"{rec.label} is probable prime? {str(rec.probably_prime).lower()}. Test duration: {rec.duration_ms}ms."

def format_single(res: SingleResult, trials: int, workers: Optional[int] = None) -> List[str]:
    if workers is None:
        first = f"Test performed {trials} trials."
    else:
        first = f"Test ran with {workers} threads, performing {trials} trials."
    verdict = ("Number passed the test and is probably prime." if res.probably_prime
               else "Number is composite.")
    return [first, f"Duration of test: {res.duration_ms} milliseconds.", verdict]

def write_results(path, records: Iterable[TestRecord], trials: int,
                  workers: Optional[int] = None) -> Path:
    """Header, then one record per line. Overwrites `path`."""
    p = Path(path)
    lines = header_lines(trials, workers) + [format_record(r) for r in records]
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return p


# ---------- Plot ----------

def plot_durations(series: Dict[str, List[TestRecord]], path) -> Path:
    """Grouped bar chart of duration per label, one bar group per engine name."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import numpy as np

    names = list(series)
    labels = [r.label for r in series[names[0]]] if names else []
    x = np.arange(len(labels))
    width = 0.8 / max(1, len(names))

    fig, ax = plt.subplots(figsize=(10, 5))
    for i, name in enumerate(names):
        ms = [r.duration_ms for r in series[name]]
        ax.bar(x + i * width, ms, width, label=name)
    ax.set_xticks(x + width * (len(names) - 1) / 2)
    ax.set_xticklabels(labels, rotation=30, ha="right")
    ax.set_ylabel("duration (ms)")
    ax.set_title("Miller–Rabin test duration")
    ax.legend()
    fig.tight_layout()
    p = Path(path)
    fig.savefig(p)
    plt.close(fig)
    return p
