"""Audit logging utilities.

Writes structured JSON lines to a dedicated audit log file and the standard
``audit`` logger. Each event records what an NPS caller did and how the stub
answered, keyed by the ISA manager reference number.
"""
from __future__ import annotations

import json
import logging
import os
import time
from typing import Any

from app.core.config import settings

_logger = logging.getLogger("audit")


def log_audit_event(
    action: str,
    isa_reference_number: str | None = None,
    status: str = "success",
    **metadata: Any,
) -> None:
    """Record an audit event.

    Parameters:
        action: A machine-readable action key (e.g. 'nps.submit', 'nps.declaration').
        isa_reference_number: The ISA manager reference number the call was made for.
        status: 'success' | 'failure'.
        **metadata: Additional context fields (status codes, error codes, etc.).
    """
    event = {
        "ts": int(time.time()),
        "action": action,
        "isa_reference_number": isa_reference_number,
        "status": status,
        **metadata,
    }
    line = json.dumps(event, separators=(",", ":"))
    path = settings.AUDIT_LOG_FILE
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError:
        _logger.debug("Failed to write audit event to file: %s", event)
    _logger.info(line)


def log_failure(action: str, isa_reference_number: str | None = None, error: str | None = None, **extra: Any) -> None:
    log_audit_event(action, isa_reference_number=isa_reference_number, status="failure", error=error, **extra)
