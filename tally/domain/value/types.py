"""Domain value types for the vote engine.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum

from pydantic import model_validator

from tally.domain.value.common import ValueObject
from tally.domain.value.identifiers import TargetId


class TargetType(str, Enum):
    """Type of entity that can be voted on."""

    TOPIC = "topic"
    POST = "post"


class VoteState(IntEnum):
    """A voter's state on one target.

    The value doubles as the vote weight. NONE is never stored; it is the
    absence of a ledger row.
    """

    DOWN = -1
    NONE = 0
    UP = 1

    @classmethod
    def from_weight(cls, weight: int | None) -> "VoteState":
        """Parse a wire weight (1, -1 or None).

        Raises:
            ValueError: If the weight is not one of the permitted values
        """
        if weight is None:
            return cls.NONE
        # bool is an int subclass; True must not pass as an upvote
        if (
            isinstance(weight, bool)
            or not isinstance(weight, int)
            or weight not in (1, -1)
        ):
            raise ValueError(f"Invalid vote weight: {weight!r}")
        return cls(weight)

    def as_weight(self) -> int | None:
        """Wire representation: 1, -1, or None."""
        return None if self is VoteState.NONE else int(self)


class VoteOperation(str, Enum):
    """What a transition did to the ledger."""

    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"
    NONE = "none"


class ReconciliationScope(ValueObject):
    """Which targets a reconciliation or drift scan covers.

    - no fields: every target of every type
    - target_type only: every target of that type
    - target_type and target_id: a single target
    """

    target_type: TargetType | None = None
    target_id: TargetId | None = None

    @model_validator(mode="after")
    def check_target_has_type(self) -> "ReconciliationScope":
        """A single target needs its type to be addressable."""
        if self.target_id is not None and self.target_type is None:
            raise ValueError("target_id requires target_type")
        return self

    @property
    def is_single_target(self) -> bool:
        return self.target_id is not None
