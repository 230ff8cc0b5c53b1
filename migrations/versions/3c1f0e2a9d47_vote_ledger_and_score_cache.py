"""vote_ledger_and_score_cache

Create the vote ledger and the cached score columns:
- Votes (polymorphic over forum topics and posts, weight +1 or -1)
- vote_score on forum_topics and forum_posts

The forum tables belong to the content service; they are created bare here
only when missing, so the engine can run against an empty database.

Revision ID: 3c1f0e2a9d47
Revises:
Create Date: 2026-09-14 10:12:44.501932

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0e2a9d47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM type (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_target_type AS ENUM ('topic', 'post');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # VOTABLE TARGETS (score cache columns)
    # ========================================================================
    for table in ("forum_topics", "forum_posts"):
        op.execute(f"CREATE TABLE IF NOT EXISTS {table} (id UUID PRIMARY KEY)")
        op.execute(
            f"ALTER TABLE {table} "
            "ADD COLUMN IF NOT EXISTS vote_score INTEGER NOT NULL DEFAULT 0"
        )

    # ========================================================================
    # VOTES table (the ledger)
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column(
            "target_type",
            postgresql.ENUM(
                "topic", "post", name="vote_target_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column("weight", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "target_type", "target_id", "voter_id", name="unique_vote"
        ),
        sa.CheckConstraint("weight IN (1, -1)", name="vote_weight_up_or_down"),
    )
    op.create_index("idx_votes_voter_id", "votes", ["voter_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_votes_voter_id", table_name="votes")
    op.drop_table("votes")
    op.execute("DROP TYPE IF EXISTS vote_target_type")
    # vote_score columns belong to shared forum tables; leave them in place
