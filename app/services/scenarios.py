"""Reserved reference number scenarios.

Callers select a failure path by sending one of a few reserved ISA manager
reference numbers. The table below is the whole contract: a reference number
means something only for the operation it is listed under, and anything not
listed is processed normally.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable

from app.core.exceptions import (
    BadRequestError,
    InternalServerError,
    NpsStubException,
    ServiceUnavailableError,
)


class Operation(str, Enum):
    SUBMIT = "submit"
    DECLARE = "declare"
    FETCH = "fetch"


SCENARIOS: dict[tuple[Operation, str], Callable[[], NpsStubException]] = {
    (Operation.SUBMIT, "Z1400"): BadRequestError,
    (Operation.SUBMIT, "Z1503"): ServiceUnavailableError,
    (Operation.DECLARE, "Z1500"): InternalServerError,
    (Operation.FETCH, "Z1500"): InternalServerError,
}


def resolve_scenario(operation: Operation, isa_reference_number: str) -> NpsStubException | None:
    """Return the fixed error for a reserved reference number, or None to proceed."""
    factory = SCENARIOS.get((operation, isa_reference_number))
    return factory() if factory else None


def raise_for_scenario(operation: Operation, isa_reference_number: str) -> None:
    error = resolve_scenario(operation, isa_reference_number)
    if error is not None:
        raise error
