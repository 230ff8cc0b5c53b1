"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tally.domain.model import Vote
from tally.domain.repository import LedgerTally, VoteRepository
from tally.domain.value import TargetId, TargetType, VoteId, VoterId
from tally.persistence.mappers import row_to_vote, vote_to_dict
from tally.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_target_and_voter(
        self,
        target_type: TargetType,
        target_id: TargetId,
        voter_id: VoterId,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id == target_id,
                votes_table.c.voter_id == voter_id,
            )
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_voter_and_targets(
        self,
        voter_id: VoterId,
        target_type: TargetType,
        target_ids: Sequence[TargetId],
    ) -> List[Vote]:
        """Find a voter's votes on multiple targets (batch query)."""
        if not target_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.voter_id == voter_id,
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        return vote

    async def update_weight(
        self, vote_id: VoteId, expected_weight: int, new_weight: int
    ) -> bool:
        """Flip a vote's weight if it still holds the expected weight."""
        stmt = (
            update(votes_table)
            .where(
                and_(
                    votes_table.c.id == vote_id,
                    votes_table.c.weight == expected_weight,
                )
            )
            .values(weight=new_weight, updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def delete(self, vote_id: VoteId, expected_weight: int) -> bool:
        """Delete a vote if it still holds the expected weight."""
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.id == vote_id,
                votes_table.c.weight == expected_weight,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def tally(self, target_type: TargetType, target_id: TargetId) -> LedgerTally:
        """Sum the weights and count the votes of a target."""
        stmt = select(
            func.coalesce(func.sum(votes_table.c.weight), 0),
            func.count(votes_table.c.id),
        ).where(
            and_(
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        score, vote_count = result.one()
        return LedgerTally(score=int(score), vote_count=int(vote_count))
