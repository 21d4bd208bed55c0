from __future__ import annotations

from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from core.exceptions import ConcurrencyError, NotFoundError


def bump_version(
    session: Session,
    orm_type: type[Any],
    row_id: Any,
    expected_version: int,
    values: dict[str, Any],
    *,
    label: str,
    not_found_code: str,
) -> int:
    """
    Write `values` only if the row is still at `expected_version`.
    Returns the new version.
    """
    new_version = int(expected_version) + 1
    result = session.execute(
        update(orm_type)
        .where(orm_type.id == row_id, orm_type.version == expected_version)
        .values(**values, version=new_version)
    )
    if result.rowcount == 1:
        return new_version
    if session.get(orm_type, row_id) is None:
        raise NotFoundError(f"{label} not found.", code=not_found_code)
    raise ConcurrencyError(f"{label} was changed by someone else; reload and retry.", code="STALE_WRITE")


__all__ = ["bump_version"]
