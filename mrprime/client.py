# mrprime/client.py
# Thin HTTP client for a running mrprime web API.

from __future__ import annotations
import logging, random, time
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class RemoteError(Exception):
    pass


class RemoteChecker:
    """
    Calls GET /api/isprime with bounded retries. 4xx answers are returned as
    errors straight away; connection failures and 5xx answers are retried with
    exponential backoff plus jitter.
    """

    def __init__(self, base_url: str, timeout: float = 90.0, max_tries: int = 4,
                 session: Optional[requests.Session] = None, sleep=time.sleep):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_tries = max_tries
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "mrprime-client/1.0"})
        self._sleep = sleep

    def health(self) -> dict:
        r = self.session.get(f"{self.base_url}/api/health", timeout=5)
        r.raise_for_status()
        return r.json()

    def is_probable_prime(self, n: int, trials: int = 10, workers: Optional[int] = None) -> dict:
        params = {"n": str(n), "trials": trials}
        if workers:
            params["workers"] = workers
        url = f"{self.base_url}/api/isprime"
        last = "no attempt made"
        for t in range(1, self.max_tries + 1):
            try:
                r = self.session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                last = repr(e)
                logger.warning("try %d: request error %s", t, last)
            else:
                if r.ok:
                    return r.json()
                if 400 <= r.status_code < 500:
                    raise RemoteError(f"HTTP {r.status_code}: {(r.text or '')[:500]}")
                last = f"HTTP {r.status_code}"
                logger.warning("try %d: %s", t, last)
            if t < self.max_tries:
                self._sleep(min(15.0, (2 ** t) + random.uniform(0, 2)))
        raise RemoteError(f"gave up after {self.max_tries} tries: {last}")
