from __future__ import annotations

import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.db.session import get_db

router = APIRouter(tags=["health"])


def _check_db(db: Session) -> bool:
    db.execute(text("SELECT 1"))
    return True


@router.get("/healthz")
def healthz(db: Annotated[Session, Depends(get_db)]) -> dict[str, str]:
    """Basic liveness check (cheap)."""
    try:
        _check_db(db)
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=503, detail="Database connectivity check failed") from exc
    return {"status": "ok"}


@router.get("/live")
async def live() -> dict[str, str]:
    """Kubernetes-style liveness endpoint (no dependencies)."""
    return {"status": "alive"}


@router.get("/ready")
def ready(db: Annotated[Session, Depends(get_db)]) -> dict[str, object]:
    """Readiness check; the report table is the only dependency."""
    start = time.time()
    try:
        db_ok = _check_db(db)
    except Exception:  # noqa: BLE001
        db_ok = False
    duration_ms = int((time.time() - start) * 1000)
    if not db_ok:
        raise HTTPException(status_code=503, detail={"db": db_ok, "latency_ms": duration_ms})
    return {"status": "ready", "db": db_ok, "latency_ms": duration_ms}
