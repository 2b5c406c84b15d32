# mrprime/api.py
from __future__ import annotations
import logging, math, time
from flask import Blueprint, current_app, jsonify, request

from .config import load_settings
from .engine import ConcurrentEngine, SerialEngine
from .errors import InvalidInput, TaskFailure, TrialTimeout

logger = logging.getLogger(__name__)

mr_bp = Blueprint("mr_bp", __name__)


def _settings():
    return current_app.config.get("MR_SETTINGS") or load_settings()

def _max_digits(bits: int) -> int:
    return int(bits * math.log10(2)) + 1

def _error(msg: str, code: int):
    d = jsonify({"ok": False, "error": msg})
    d.status_code = code
    return d


@mr_bp.get("/api/health")
def health():
    s = _settings()
    return jsonify({"ok": True, "msg": "ok", "max_bits": s.max_bits,
                    "default_trials": s.trials, "time": int(time.time())})

@mr_bp.get("/api/isprime")
def isprime():
    t0 = time.time()
    s = _settings()
    n_str = request.args.get("n", "").strip()
    if not (n_str.isascii() and n_str.isdigit()):
        return _error("Provide n as a positive integer string.", 400)
    if len(n_str.lstrip("0")) > _max_digits(s.max_bits):
        return _error(f"Max {s.max_bits} bits.", 400)
    try:
        trials = int(request.args.get("trials", s.trials))
        workers = request.args.get("workers")
        workers = int(workers) if workers not in (None, "") else None
    except ValueError:
        return _error("trials and workers must be integers", 400)
    if trials < 1 or trials > 1000:
        return _error("trials must be in 1..1000", 400)
    if workers is not None and not 1 <= workers <= 64:
        return _error("workers must be in 1..64", 400)

    try:
        n = int(n_str)
    except ValueError:
        return _error("Provide n as a positive integer string.", 400)
    if n.bit_length() > s.max_bits:
        return _error(f"Max {s.max_bits} bits.", 400)

    if workers is None:
        engine = SerialEngine()
    else:
        engine = ConcurrentEngine(workers, timeout_s=s.timeout_s)
    try:
        ok = engine.is_probable_prime(n, trials)
    except InvalidInput as e:
        return _error(str(e), 400)
    except TrialTimeout as e:
        return _error(str(e), 504)
    except TaskFailure as e:
        logger.exception("trial failure")
        return _error(str(e), 500)

    ms = int((time.time() - t0) * 1000)
    d = jsonify({"ok": True, "n": n_str, "bits": n.bit_length(), "trials": trials,
                 "workers": workers, "probable_prime": ok, "duration_ms": ms})
    d.headers["X-Compute-ms"] = str(ms)
    return d
