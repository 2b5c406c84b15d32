# mrprime/cli.py
from __future__ import annotations
import argparse, json, logging, sys

from .accuracy import run_suite
from .bench import format_record, format_single, header_lines, plot_durations, run_full, run_single, write_results
from .client import RemoteChecker, RemoteError
from .config import load_settings
from .errors import InvalidInput, TaskFailure, TrialTimeout
from .primes import DEFAULT_INDICES, parse_candidate

EXIT_INVALID, EXIT_TIMEOUT, EXIT_TASK = 2, 3, 4


def _cmd_check(args) -> int:
    try:
        label, n = parse_candidate(args.N)
    except ValueError as e:
        print(f"# bad candidate {args.N!r}: {e}", file=sys.stderr)
        return EXIT_INVALID
    print(f"Testing {label} ({n.bit_length()} bits)...", flush=True)
    res = run_single(n, args.trials, args.workers, args.timeout)
    for line in format_single(res, args.trials, args.workers):
        print(line)
    return 0

def _cmd_bench(args) -> int:
    def progress(i, k):
        print(f"{i} ", end="", flush=True)
    engines = {}
    if args.workers is None or args.both:
        engines["serial"] = None
    if args.workers:
        engines[f"{args.workers} threads"] = args.workers
    series = {}
    for name, workers in engines.items():
        print("\n".join(header_lines(args.trials, workers)))
        records = run_full(args.trials, workers, indices=args.range,
                           timeout_s=args.timeout, progress=progress)
        print()
        for r in records:
            print(format_record(r))
        if args.out:
            path = args.out if len(engines) == 1 else _suffixed(args.out, name)
            write_results(path, records, args.trials, workers)
            print(f"Wrote {len(records)} records to {path}")
        series[name] = records
    if args.plot:
        print(f"Wrote plot to {plot_durations(series, args.plot)}")
    return 0

def _suffixed(path: str, name: str) -> str:
    tag = name.split()[0]
    stem, dot, ext = path.rpartition(".")
    return f"{stem}_{tag}.{ext}" if dot else f"{path}_{tag}"

def _index_range(text: str):
    lo, _, hi = text.partition("-")
    try:
        lo, hi = int(lo), int(hi or lo)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected K or A-B, got {text!r}")
    return tuple(range(lo, hi + 1))

def _cmd_suite(args) -> int:
    summary = run_suite(seed=args.seed, trials=args.trials, workers=args.workers or 4, out=args.out)
    print("\n=== SUMMARY ===")
    print(f"Total: {summary['total']} | PASS: {summary['passed']} | FAIL: {summary['total'] - summary['passed']}")
    for k, (p, f) in summary["by_expect"].items():
        print(f"  {k:10s}  PASS {p:3d}  FAIL {f:3d}")
    if summary["failures"] and args.out:
        print(f"\nWrote details for {len(summary['failures'])} failures to {args.out}")
    return 0 if not summary["failures"] else 1

def _cmd_remote(args) -> int:
    try:
        _, n = parse_candidate(args.N)
        out = RemoteChecker(args.url).is_probable_prime(n, args.trials, args.workers)
    except (ValueError, RemoteError) as e:
        print(f"remote error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(out, indent=2))
    return 0


def build_parser(settings=None) -> argparse.ArgumentParser:
    s = settings or load_settings()
    ap = argparse.ArgumentParser(prog="mrprime", description="Miller–Rabin probable-prime testing")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    sub = ap.add_subparsers(dest="cmd", required=True)

    def common(p, workers_default=None):
        p.add_argument("--trials", type=int, default=s.trials)
        p.add_argument("--workers", type=int, default=workers_default,
                       help="run the concurrent engine with this many workers")
        p.add_argument("--timeout", type=float, default=s.timeout_s,
                       help="seconds to wait for all concurrent trials; on timeout the "
                            "error is reported at once, but the process only exits "
                            "after the abandoned trials have finished")

    p = sub.add_parser("check", help="test one number (decimal or M<k>)")
    p.add_argument("N")
    common(p)
    p.set_defaults(func=_cmd_check)

    p = sub.add_parser("bench", help="time the reference Mersenne primes")
    common(p)
    p.add_argument("--range", type=_index_range, default=DEFAULT_INDICES,
                   help="Mersenne indices to time, e.g. 15-23 (default)")
    p.add_argument("--both", action="store_true", help="also run the serial engine")
    p.add_argument("--out", help="write records to this text file")
    p.add_argument("--plot", help="write a duration bar chart (png)")
    p.set_defaults(func=_cmd_bench)

    p = sub.add_parser("suite", help="accuracy suite against sympy")
    common(p, workers_default=s.workers)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--out", default="accuracy_failures.csv")
    p.set_defaults(func=_cmd_suite)

    p = sub.add_parser("remote", help="ask a running web API")
    p.add_argument("N")
    p.add_argument("--url", required=True)
    common(p)
    p.set_defaults(func=_cmd_remote)
    return ap


def _check_counts(args) -> None:
    if args.trials < 1:
        raise ValueError(f"--trials must be a positive integer, got {args.trials}")
    if args.workers is not None and args.workers < 1:
        raise ValueError(f"--workers must be a positive integer, got {args.workers}")


def main(argv=None) -> int:
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)
    settings = load_settings()
    args = build_parser(settings).parse_args(argv)
    level = logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else settings.log_level
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        _check_counts(args)
        return args.func(args)
    except InvalidInput as e:
        print(f"invalid input: {e}", file=sys.stderr)
        return EXIT_INVALID
    except TrialTimeout as e:
        print(f"timeout: {e}", file=sys.stderr)
        return EXIT_TIMEOUT
    except TaskFailure as e:
        print(f"trial failure: {e}", file=sys.stderr)
        return EXIT_TASK
    except ValueError as e:
        print(f"invalid argument: {e}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    raise SystemExit(main())
