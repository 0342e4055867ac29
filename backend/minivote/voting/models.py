from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

MIN_OPTIONS = 2
MAX_OPTIONS = 6
MAX_TITLE_LENGTH = 120
MAX_DESCRIPTION_LENGTH = 1000
MAX_OPTION_LENGTH = 100


class VotingStatus(str, Enum):
    ACTIVE = "active"
    AWAITING_REVEAL = "awaiting_reveal"
    REVEALED = "revealed"


@dataclass
class VotingOption:
    id: int
    text: str
    vote_count: int = 0


@dataclass
class Voting:
    id: int
    title: str
    description: str
    creator_id: str
    options: List[VotingOption]
    capacity: int
    participant_count: int = 0
    status: VotingStatus = VotingStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is VotingStatus.ACTIVE

    @property
    def is_revealed(self) -> bool:
        return self.status is VotingStatus.REVEALED

    @property
    def total_votes(self) -> int:
        return sum(option.vote_count for option in self.options)

    def option(self, option_id: int) -> Optional[VotingOption]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None

    def snapshot(self) -> "Voting":
        """Detached copy; callers may mutate it freely."""
        return copy.deepcopy(self)


@dataclass(frozen=True)
class VoteRecord:
    voting_id: int
    option_id: int


@dataclass(frozen=True)
class Confirmation:
    """Outcome of an external submission, e.g. a transaction hash."""

    handle: str


@dataclass(frozen=True)
class Notification:
    title: str
    body: str


@dataclass
class VotingDraft:
    """User input for a new voting, before it is confirmed and stored."""

    title: str
    description: str
    options: List[str] = field(default_factory=list)
    capacity: int = 0


__all__ = [
    "MIN_OPTIONS",
    "MAX_OPTIONS",
    "MAX_TITLE_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "MAX_OPTION_LENGTH",
    "VotingStatus",
    "VotingOption",
    "Voting",
    "VoteRecord",
    "Confirmation",
    "Notification",
    "VotingDraft",
]
