"""Row lock modes requested by read-modify-write use cases."""

from enum import StrEnum


class RowLock(StrEnum):
    """UPDATE serializes writers of one entity; SHARE keeps a referenced row alive."""

    UPDATE = "update"
    SHARE = "share"
