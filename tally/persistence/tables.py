"""SQLAlchemy table definitions for the vote engine.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from tally.domain.value import TargetType

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# VOTES TABLE (the ledger, polymorphic over topics and posts)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "target_type",
        Enum("topic", "post", name="vote_target_type", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),
    Column("voter_id", UUID, nullable=False),
    Column("weight", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("target_type", "target_id", "voter_id", name="unique_vote"),
    CheckConstraint("weight IN (1, -1)", name="vote_weight_up_or_down"),
)

# unique_vote covers lookups by target; this one serves per-voter batches
Index("idx_votes_voter_id", votes_table.c.voter_id)

# ============================================================================
# VOTABLE TARGETS (owned by the forum; only id and vote_score are mapped)
# ============================================================================
forum_topics_table = Table(
    "forum_topics",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("vote_score", Integer, nullable=False, server_default="0"),
)

forum_posts_table = Table(
    "forum_posts",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("vote_score", Integer, nullable=False, server_default="0"),
)

TARGET_TABLES: dict[TargetType, Table] = {
    TargetType.TOPIC: forum_topics_table,
    TargetType.POST: forum_posts_table,
}
