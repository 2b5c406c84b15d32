# mrprime/config.py
from __future__ import annotations
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    trials: int
    workers: int
    timeout_s: float
    max_bits: int
    log_level: str


def load_settings() -> Settings:
    """Read MR_* environment variables; unset or blank values fall back to defaults."""
    return Settings(
        trials=int(os.getenv("MR_TRIALS") or "10"),
        workers=int(os.getenv("MR_WORKERS") or "4"),
        timeout_s=float(os.getenv("MR_TIMEOUT_S") or "60"),
        max_bits=int(os.getenv("MR_MAX_BITS") or "8192"),
        log_level=(os.getenv("MR_LOG_LEVEL") or "WARNING").strip().upper(),
    )
