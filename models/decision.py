"""Results returned by destructive operations.

Services never prompt. When an operation needs the user's consent it returns
NEEDS_CONFIRMATION without touching the store, and the caller re-invokes it
with confirmed=True once the user agrees.
"""

from dataclasses import dataclass
from enum import Enum


class Outcome(Enum):
    DONE = "done"
    NOT_FOUND = "not_found"
    NEEDS_CONFIRMATION = "needs_confirmation"
    PROTECTED = "protected"


@dataclass
class DeleteResult:
    """Outcome of a delete request.

    Attributes:
        outcome: What happened (or would need to happen).
        affected: Number of expenses that reference the deleted record and
            were (or would be) reassigned.
    """

    outcome: Outcome
    affected: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.DONE

    @property
    def needs_confirmation(self) -> bool:
        return self.outcome is Outcome.NEEDS_CONFIRMATION
