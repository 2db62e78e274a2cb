# =============================================
# File: oborobot/utils/timing.py
# Purpose: Elapsed-time helper for pipeline logging
# =============================================
import time
from contextlib import contextmanager


@contextmanager
def timer():
    """Yields a callable returning milliseconds since entry (usable after exit too)."""
    t0 = time.perf_counter()
    yield lambda: int((time.perf_counter() - t0) * 1000)
