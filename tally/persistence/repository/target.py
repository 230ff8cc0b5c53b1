"""PostgreSQL implementation of the score cache repository."""

from typing import List, Optional

from sqlalchemy import Table, and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tally.domain.error import NotFoundError
from tally.domain.repository import TargetRepository
from tally.domain.value import TargetId, TargetType
from tally.persistence.tables import TARGET_TABLES


class PostgresTargetRepository(TargetRepository):
    """Reads and writes ``vote_score`` on forum_topics / forum_posts."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _table(target_type: TargetType) -> Table:
        return TARGET_TABLES[target_type]

    async def exists(self, target_type: TargetType, target_id: TargetId) -> bool:
        """Check whether a target exists."""
        table = self._table(target_type)
        stmt = select(table.c.id).where(table.c.id == target_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_score(
        self,
        target_type: TargetType,
        target_id: TargetId,
        for_update: bool = False,
    ) -> Optional[int]:
        """Read the cached score, optionally locking the target row."""
        table = self._table(target_type)
        stmt = select(table.c.vote_score).where(table.c.id == target_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def apply_score_delta(
        self, target_type: TargetType, target_id: TargetId, delta: int
    ) -> int:
        """Atomically add ``delta`` to the cached score.

        Uses a SQL-level increment so concurrent voters never lose updates.
        """
        table = self._table(target_type)
        stmt = (
            update(table)
            .where(table.c.id == target_id)
            .values(vote_score=table.c.vote_score + delta)
            .returning(table.c.vote_score)
        )
        result = await self.session.execute(stmt)
        score = result.scalar_one_or_none()
        if score is None:
            raise NotFoundError(target_type.value.capitalize(), str(target_id))
        return score

    async def compare_and_set_score(
        self,
        target_type: TargetType,
        target_id: TargetId,
        expected: int,
        new: int,
    ) -> bool:
        """Overwrite the cached score only if it still equals ``expected``."""
        table = self._table(target_type)
        stmt = (
            update(table)
            .where(and_(table.c.id == target_id, table.c.vote_score == expected))
            .values(vote_score=new)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def list_ids(self, target_type: TargetType) -> List[TargetId]:
        """List the IDs of every target of a type."""
        table = self._table(target_type)
        result = await self.session.execute(select(table.c.id).order_by(table.c.id))
        return [TargetId(target_id) for target_id in result.scalars().all()]
