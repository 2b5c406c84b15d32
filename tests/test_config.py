from mrprime.config import load_settings


def test_defaults(monkeypatch):
    for k in ("MR_TRIALS", "MR_WORKERS", "MR_TIMEOUT_S", "MR_MAX_BITS", "MR_LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)
    s = load_settings()
    assert (s.trials, s.workers, s.timeout_s, s.max_bits, s.log_level) == (10, 4, 60.0, 8192, "WARNING")


def test_overrides(monkeypatch):
    monkeypatch.setenv("MR_TRIALS", "25")
    monkeypatch.setenv("MR_WORKERS", "8")
    monkeypatch.setenv("MR_TIMEOUT_S", "1.5")
    monkeypatch.setenv("MR_MAX_BITS", "")
    monkeypatch.setenv("MR_LOG_LEVEL", " debug ")
    s = load_settings()
    assert (s.trials, s.workers, s.timeout_s, s.max_bits, s.log_level) == (25, 8, 1.5, 8192, "DEBUG")
