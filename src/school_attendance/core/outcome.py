from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import OutcomeKind


@dataclass(frozen=True)
class Outcome:
    """Result of an operation that may touch the remote store.

    Callers decide whether to warn, retry or roll back from ``kind``;
    nothing across the sync seam signals failure by raising. ``refused``
    marks an operation that was not attempted at all (offline, busy).
    """

    kind: OutcomeKind
    message: Optional[str] = None
    warning: Optional[str] = None
    needs_setup: bool = False
    refused: bool = False

    @classmethod
    def ok(cls, message: Optional[str] = None, *, warning: Optional[str] = None) -> "Outcome":
        return cls(kind=OutcomeKind.OK, message=message, warning=warning)

    @classmethod
    def queued_offline(cls, message: str, *, refused: bool = False) -> "Outcome":
        return cls(kind=OutcomeKind.QUEUED_OFFLINE, message=message, refused=refused)

    @classmethod
    def failed(cls, reason: str, *, needs_setup: bool = False, refused: bool = False) -> "Outcome":
        return cls(kind=OutcomeKind.FAILED, message=reason, needs_setup=needs_setup, refused=refused)

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    def to_dict(self) -> dict:
        return {
            "success": self.kind is not OutcomeKind.FAILED,
            "outcome": self.kind.value,
            "message": self.message,
            "warning": self.warning,
            "needs_setup": self.needs_setup,
        }
