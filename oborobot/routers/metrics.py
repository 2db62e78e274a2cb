# =============================================
# File: oborobot/routers/metrics.py
# Purpose: Expose internal metrics as JSON
# =============================================
from __future__ import annotations
from fastapi import APIRouter
from oborobot.utils.metrics import snapshot

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
def get_metrics():
    """Return in-process counters: suggestions, degraded samples, errors by kind, latency."""
    return snapshot()
