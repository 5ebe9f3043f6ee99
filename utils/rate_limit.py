import math
import time
from dataclasses import dataclass
from threading import Lock

# Idle buckets are swept at most this often (seconds)
SWEEP_INTERVAL = 60.0


@dataclass
class RateLimitResult:
    allowed: bool
    remaining: int
    retry_after: float = 0.0


@dataclass
class _Bucket:
    tokens: float
    updated_at: float
    capacity: float
    refill_rate_per_sec: float

    def refill(self, now):
        elapsed = max(0.0, now - self.updated_at)
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate_per_sec)
        self.updated_at = now

    def is_full_at(self, now):
        elapsed = max(0.0, now - self.updated_at)
        return self.tokens + elapsed * self.refill_rate_per_sec >= self.capacity


_buckets = {}
_lock = Lock()
_last_sweep = None


def build_rate_key(parts):
    return ":".join(str(p) for p in parts if p)


def _sweep(now):
    """Drop buckets that have refilled to capacity; they are indistinguishable from new ones."""
    global _last_sweep
    if _last_sweep is not None and now - _last_sweep < SWEEP_INTERVAL:
        return
    _last_sweep = now
    for key in [k for k, b in _buckets.items() if b.is_full_at(now)]:
        del _buckets[key]


def check_rate_limit(key, capacity=10, refill_rate_per_sec=0.2, now=None):
    """Token bucket: each call spends one token; tokens refill continuously up to `capacity`."""
    now = time.monotonic() if now is None else now
    with _lock:
        _sweep(now)
        bucket = _buckets.get(key)
        if bucket is None:
            bucket = _Bucket(
                tokens=float(capacity),
                updated_at=now,
                capacity=float(capacity),
                refill_rate_per_sec=refill_rate_per_sec,
            )
        else:
            bucket.refill(now)
        _buckets[key] = bucket

        if bucket.tokens >= 1:
            bucket.tokens -= 1
            return RateLimitResult(allowed=True, remaining=int(math.floor(bucket.tokens)))

        retry_after = (1 - bucket.tokens) / refill_rate_per_sec if refill_rate_per_sec > 0 else math.inf
        return RateLimitResult(allowed=False, remaining=0, retry_after=retry_after)


def client_ip(request):
    """Peer address; behind a proxy `ProxyFix` rewrites it from the trusted forwarding hops."""
    return request.remote_addr or "unknown-ip"


def bucket_count():
    with _lock:
        return len(_buckets)


def reset_rate_limits():
    global _last_sweep
    with _lock:
        _buckets.clear()
        _last_sweep = None
