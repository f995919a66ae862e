from typing import Any

from fastapi import HTTPException

# Largest value a 32-bit ``SERIAL`` primary key can hold.
MAX_ID = 2**31 - 1


def valid_id(value: int) -> bool:
    """True when *value* could be a stored primary key."""
    return 1 <= value <= MAX_ID


def require_fields(values: dict[str, Any]) -> None:
    """
    Reject the request with a 400 naming the first falsy entry of *values*.

    Order matters: fields are checked in the order the caller listed them,
    so a body missing several fields always reports the same one.  The test
    is a plain truthiness check, so ``""``, ``0`` and ``null`` all count as
    missing.
    """
    for key, value in values.items():
        if not value:
            raise HTTPException(status_code=400, detail=f"Missing '{key}' in request body")


def updated_fields(values: dict[str, Any]) -> dict[str, Any]:
    """
    Return the truthy subset of *values* for a partial update.

    Raises a 400 listing the accepted fields when nothing usable was
    supplied, so a PATCH can never turn into a silent no-op.
    """
    fields = {key: value for key, value in values.items() if value}
    if not fields:
        names = list(values)
        if len(names) <= 2:
            listed = " or ".join(names)
        else:
            listed = f"{', '.join(names[:-1])}, or {names[-1]}"
        raise HTTPException(status_code=400, detail=f"Request body must contain either {listed}")
    return fields
