"""Unit tests for the vote transition tables."""

import pytest

from tally.domain.value import (
    SET,
    TOGGLE,
    LedgerWrite,
    VoteOperation,
    VoteState,
    resolve,
    resolve_stale,
)

UP, DOWN, NONE = VoteState.UP, VoteState.DOWN, VoteState.NONE


class TestToggleTable:
    """Every (current, requested) cell of the interactive table."""

    @pytest.mark.parametrize(
        "current,requested,write,result,delta",
        [
            (NONE, NONE, LedgerWrite.NOOP, NONE, 0),
            (NONE, UP, LedgerWrite.INSERT, UP, 1),
            (NONE, DOWN, LedgerWrite.INSERT, DOWN, -1),
            (UP, NONE, LedgerWrite.DELETE, NONE, -1),
            (UP, UP, LedgerWrite.DELETE, NONE, -1),
            (UP, DOWN, LedgerWrite.UPDATE, DOWN, -2),
            (DOWN, NONE, LedgerWrite.DELETE, NONE, 1),
            (DOWN, UP, LedgerWrite.UPDATE, UP, 2),
            (DOWN, DOWN, LedgerWrite.DELETE, NONE, 1),
        ],
    )
    def test_cell(self, current, requested, write, result, delta):
        transition = resolve(current, requested)

        assert transition.write is write
        assert transition.result is result
        assert transition.delta(current) == delta

    def test_table_is_total(self):
        """Every pair of states has exactly one transition."""
        assert set(TOGGLE) == {(c, r) for c in VoteState for r in VoteState}

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            TOGGLE[(NONE, UP)] = TOGGLE[(NONE, NONE)]  # type: ignore[index]


class TestSetTable:
    """The table used when the voter state moved under a request."""

    @pytest.mark.parametrize("state", [UP, DOWN])
    def test_repeating_current_state_is_noop(self, state):
        transition = resolve(state, state, SET)

        assert transition.write is LedgerWrite.NOOP
        assert transition.result is state
        assert transition.delta(state) == 0

    def test_other_cells_match_toggle(self):
        differing = {key for key in TOGGLE if TOGGLE[key] != SET[key]}

        assert differing == {(UP, UP), (DOWN, DOWN)}


class TestResolveStale:
    """A request whose voter state was changed by another of their requests."""

    @pytest.mark.parametrize(
        "first_seen,requested",
        [
            (NONE, UP),
            (NONE, DOWN),
            (UP, UP),
            (DOWN, DOWN),
            (UP, DOWN),
            (DOWN, UP),
            (UP, NONE),
        ],
    )
    def test_duplicate_of_applied_request_is_noop(self, first_seen, requested):
        # The twin request already moved the state to where this one leads
        current = resolve(first_seen, requested).result

        transition = resolve_stale(first_seen, current, requested)

        assert transition.write is LedgerWrite.NOOP
        assert transition.result is current

    def test_retract_after_other_swing_removes_vote(self):
        # Voter saw UP and clicked UP to retract; meanwhile a DOWN landed
        transition = resolve_stale(UP, DOWN, UP)

        assert transition.write is LedgerWrite.DELETE
        assert transition.result is NONE

    def test_vote_after_other_vote_sets_requested_state(self):
        # Voter saw NONE and clicked DOWN; meanwhile an UP landed
        transition = resolve_stale(NONE, UP, DOWN)

        assert transition.write is LedgerWrite.UPDATE
        assert transition.result is DOWN


class TestTransitionOperation:
    @pytest.mark.parametrize(
        "current,requested,operation",
        [
            (NONE, UP, VoteOperation.CREATED),
            (UP, DOWN, VoteOperation.UPDATED),
            (DOWN, DOWN, VoteOperation.REMOVED),
            (NONE, NONE, VoteOperation.NONE),
        ],
    )
    def test_operation_follows_ledger_write(self, current, requested, operation):
        assert resolve(current, requested).operation is operation


class TestVoteStateFromWeight:
    @pytest.mark.parametrize(
        "weight,state", [(1, UP), (-1, DOWN), (None, NONE)]
    )
    def test_permitted_weights(self, weight, state):
        assert VoteState.from_weight(weight) is state

    @pytest.mark.parametrize("weight", [0, 2, -2, True, False, 1.0])
    def test_rejects_other_weights(self, weight):
        with pytest.raises(ValueError, match="Invalid vote weight"):
            VoteState.from_weight(weight)

    def test_none_is_null_on_the_wire(self):
        assert NONE.as_weight() is None
        assert UP.as_weight() == 1
        assert DOWN.as_weight() == -1
