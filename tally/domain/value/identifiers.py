"""Strongly typed identifiers for the vote engine.

Using NewType for strong typing prevents mixing up voter and target IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

VoteId = NewType("VoteId", UUID)
VoterId = NewType("VoterId", UUID)
TargetId = NewType("TargetId", UUID)
