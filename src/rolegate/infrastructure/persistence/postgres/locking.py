"""SQL row lock clauses."""

from rolegate.application.ports.repositories import RowLock

_CLAUSES = {RowLock.UPDATE: " FOR UPDATE", RowLock.SHARE: " FOR SHARE"}


def lock_clause(lock: RowLock | None) -> str:
    return _CLAUSES[lock] if lock else ""
