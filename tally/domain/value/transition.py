"""Vote transition tables.

Each (target, voter) pair is a three-state machine over VoteState. A
transition names the single ledger write it needs and the state it ends in;
the score delta is always ``result - current``.

Two tables exist:

- TOGGLE: the interactive semantics. Repeating the current vote retracts it
  ("click the same arrow again").
- SET: moves straight to a target state. Used when another request by the
  same voter changed the state after a request first read it: the request
  is turned into the state its voter meant from what they saw, and a state
  that already holds is a no-op rather than a retraction.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

from tally.domain.value.types import VoteOperation, VoteState


class LedgerWrite(str, Enum):
    """Ledger mutation required by a transition."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"


class Transition(NamedTuple):
    """One cell of a transition table."""

    write: LedgerWrite
    result: VoteState

    def delta(self, current: VoteState) -> int:
        """Score change caused by moving from ``current`` to ``result``."""
        return int(self.result) - int(current)

    @property
    def operation(self) -> VoteOperation:
        return _OPERATIONS[self.write]


_OPERATIONS = {
    LedgerWrite.INSERT: VoteOperation.CREATED,
    LedgerWrite.UPDATE: VoteOperation.UPDATED,
    LedgerWrite.DELETE: VoteOperation.REMOVED,
    LedgerWrite.NOOP: VoteOperation.NONE,
}

_NONE, _UP, _DOWN = VoteState.NONE, VoteState.UP, VoteState.DOWN

TransitionTable = Mapping[tuple[VoteState, VoteState], Transition]

# (current, requested) -> transition
TOGGLE: TransitionTable = MappingProxyType(
    {
        (_NONE, _NONE): Transition(LedgerWrite.NOOP, _NONE),
        (_NONE, _UP): Transition(LedgerWrite.INSERT, _UP),
        (_NONE, _DOWN): Transition(LedgerWrite.INSERT, _DOWN),
        (_UP, _NONE): Transition(LedgerWrite.DELETE, _NONE),
        (_UP, _UP): Transition(LedgerWrite.DELETE, _NONE),
        (_UP, _DOWN): Transition(LedgerWrite.UPDATE, _DOWN),
        (_DOWN, _NONE): Transition(LedgerWrite.DELETE, _NONE),
        (_DOWN, _UP): Transition(LedgerWrite.UPDATE, _UP),
        (_DOWN, _DOWN): Transition(LedgerWrite.DELETE, _NONE),
    }
)

SET: TransitionTable = MappingProxyType(
    {
        **TOGGLE,
        (_UP, _UP): Transition(LedgerWrite.NOOP, _UP),
        (_DOWN, _DOWN): Transition(LedgerWrite.NOOP, _DOWN),
    }
)


def resolve(
    current: VoteState, requested: VoteState, table: TransitionTable = TOGGLE
) -> Transition:
    """Look up the transition for a request."""
    return table[(current, requested)]


def resolve_stale(
    first_seen: VoteState, current: VoteState, requested: VoteState
) -> Transition:
    """Look up the transition for a request whose voter state moved under it.

    The request is read against ``first_seen``, the state its voter acted
    on, and the resulting target state is then set from ``current``. A
    duplicate of the request that moved the state is therefore a no-op.
    """
    intended = resolve(first_seen, requested, TOGGLE).result
    return resolve(current, intended, SET)
