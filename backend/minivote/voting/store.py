"""
In-memory store of votings and their tallies.

Votings live in a mapping keyed by id and are mutated in place. Every
mutation of a voting runs under that voting's own lock, so the capacity check
and the increment that follows it can never interleave with another vote or
reveal on the same voting. Votings with different ids do not contend.
"""

from __future__ import annotations

import threading
from collections import deque
from contextlib import contextmanager
from typing import Deque, Dict, Iterator, List, Optional, Sequence, Set, Tuple

from minivote.core.logger import voting_logger as logger
from minivote.voting.errors import (
    AlreadyVotedError,
    InvalidStateError,
    NotActiveError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from minivote.voting.identity import creator_matches, normalize_identity, require_identity
from minivote.voting.models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_OPTION_LENGTH,
    MAX_OPTIONS,
    MAX_TITLE_LENGTH,
    MIN_OPTIONS,
    Voting,
    VotingOption,
    VotingStatus,
)


def _clean_text(value: object, field: str, limit: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    text = value.strip()
    if not text:
        raise ValidationError(f"{field} must not be empty")
    if len(text) > limit:
        raise ValidationError(f"{field} must be at most {limit} characters")
    return text


def validate_voting_input(
    title: object,
    description: object,
    options: object,
    capacity: object,
) -> Tuple[str, str, List[str], int]:
    """
    Check creation input and return it trimmed.

    Raises ``ValidationError`` on the first problem found. Nothing is stored.
    """
    clean_title = _clean_text(title, "title", MAX_TITLE_LENGTH)
    clean_description = _clean_text(description, "description", MAX_DESCRIPTION_LENGTH)

    if isinstance(options, (str, bytes)) or not isinstance(options, Sequence):
        raise ValidationError("options must be a list of strings")
    if not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
        raise ValidationError(f"a voting needs between {MIN_OPTIONS} and {MAX_OPTIONS} options")
    clean_options = [
        _clean_text(text, f"option {index}", MAX_OPTION_LENGTH)
        for index, text in enumerate(options, start=1)
    ]

    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValidationError("capacity must be an integer")
    if capacity <= 0:
        raise ValidationError("capacity must be positive")

    return clean_title, clean_description, clean_options, capacity


def check_can_vote(voting: Voting, option_id: int) -> VotingOption:
    option = voting.option(option_id)
    if option is None:
        raise NotFoundError(f"option {option_id} not found in voting {voting.id}")
    if not voting.is_active or voting.participant_count >= voting.capacity:
        raise NotActiveError(f"voting {voting.id} is not accepting votes")
    return option


def check_can_reveal(voting: Voting, requester_id: Optional[str], allow_truncated: bool = True) -> None:
    if not creator_matches(voting.creator_id, requester_id, allow_truncated=allow_truncated):
        raise NotAuthorizedError("only the creator can reveal results")
    if voting.status is VotingStatus.ACTIVE:
        raise InvalidStateError(f"voting {voting.id} is still active")
    if voting.status is VotingStatus.REVEALED:
        raise InvalidStateError(f"voting {voting.id} is already revealed")


class VotingStore:
    """Authoritative collection of votings keyed by id."""

    def __init__(self) -> None:
        self._votings: Dict[int, Voting] = {}
        self._locks: Dict[int, threading.RLock] = {}
        self._voters: Dict[int, Set[str]] = {}
        self._order: Deque[int] = deque()
        self._registry = threading.Lock()
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._votings)

    def __contains__(self, voting_id: object) -> bool:
        return voting_id in self._votings

    # ---------------- Locking ----------------
    def _lock_for(self, voting_id: int) -> threading.RLock:
        with self._registry:
            lock = self._locks.get(voting_id)
        if lock is None:
            raise NotFoundError(f"voting {voting_id} not found")
        return lock

    @contextmanager
    def lock(self, voting_id: int) -> Iterator[Voting]:
        """Hold the mutation lock of one voting. Re-entrant for the holder."""
        with self._lock_for(voting_id):
            yield self._votings[voting_id]

    def _register(self, voting: Voting, voters: Set[str], newest: bool) -> None:
        # caller holds self._registry
        self._votings[voting.id] = voting
        self._locks[voting.id] = threading.RLock()
        self._voters[voting.id] = voters
        if newest:
            self._order.appendleft(voting.id)
        else:
            self._order.append(voting.id)
        self._last_id = max(self._last_id, voting.id)

    # ---------------- Reads ----------------
    def get(self, voting_id: int) -> Voting:
        with self.lock(voting_id) as voting:
            return voting.snapshot()

    def list(self) -> List[Voting]:
        """All votings, most recently created first."""
        with self._registry:
            ids = list(self._order)
        return [self.get(voting_id) for voting_id in ids]

    def has_option(self, voting_id: int, option_id: int) -> bool:
        voting = self._votings.get(voting_id)
        return voting is not None and voting.option(option_id) is not None

    # ---------------- Mutations ----------------
    def create_voting(
        self,
        title: str,
        description: str,
        options: Sequence[str],
        capacity: int,
        creator_id: str,
    ) -> Voting:
        require_identity(creator_id)
        clean_title, clean_description, texts, capacity = validate_voting_input(
            title, description, options, capacity
        )
        creator = creator_id.strip()

        with self._registry:
            voting = Voting(
                id=self._last_id + 1,
                title=clean_title,
                description=clean_description,
                creator_id=creator,
                options=[VotingOption(id=index, text=text) for index, text in enumerate(texts, start=1)],
                capacity=capacity,
            )
            self._register(voting, set(), newest=True)
            snapshot = voting.snapshot()

        logger.info(
            f"Voting {voting.id} created by {creator} with {len(texts)} options, capacity {capacity}"
        )
        return snapshot

    def cast_vote(self, voting_id: int, option_id: int, voter_id: str) -> Voting:
        voter = require_identity(voter_id)
        with self.lock(voting_id) as voting:
            try:
                option = check_can_vote(voting, option_id)
            except NotActiveError:
                logger.warning(f"Vote by {voter} rejected: voting {voting_id} is {voting.status.value}")
                raise
            voters = self._voters[voting_id]
            if voter in voters:
                logger.warning(f"Vote by {voter} rejected: already applied for voting {voting_id}")
                raise AlreadyVotedError(f"{voter} already voted in voting {voting_id}")

            option.vote_count += 1
            voting.participant_count += 1
            voters.add(voter)
            if voting.participant_count == voting.capacity:
                voting.status = VotingStatus.AWAITING_REVEAL
                logger.info(f"Voting {voting_id} reached capacity {voting.capacity}; awaiting reveal")

            logger.info(
                f"Vote applied: voting {voting_id} option {option_id} "
                f"({voting.participant_count}/{voting.capacity})"
            )
            return voting.snapshot()

    def reveal_results(self, voting_id: int, requester_id: str, allow_truncated: bool = True) -> Voting:
        requester = require_identity(requester_id)
        with self.lock(voting_id) as voting:
            try:
                check_can_reveal(voting, requester, allow_truncated=allow_truncated)
            except (NotAuthorizedError, InvalidStateError) as exc:
                logger.warning(f"Reveal of voting {voting_id} by {requester} rejected: {exc.message}")
                raise

            voting.status = VotingStatus.REVEALED
            logger.info(f"Voting {voting_id} revealed by {requester}")
            return voting.snapshot()

    def import_voting(self, voting: Voting, voters: Optional[Sequence[str]] = None) -> Voting:
        """
        Load an already-populated voting, keeping its id, tallies and status.

        Used for seed data. The voting must satisfy every tally and status
        invariant; ``voters`` optionally names identities already counted.
        """
        title, description, texts, capacity = validate_voting_input(
            voting.title, voting.description, [opt.text for opt in voting.options], voting.capacity
        )
        if isinstance(voting.id, bool) or not isinstance(voting.id, int) or voting.id <= 0:
            raise ValidationError("voting id must be a positive integer")
        if not (voting.creator_id or "").strip():
            raise ValidationError("creator identity must not be empty")

        option_ids = [opt.id for opt in voting.options]
        if len(set(option_ids)) != len(option_ids) or any(
            isinstance(i, bool) or not isinstance(i, int) or i <= 0 for i in option_ids
        ):
            raise ValidationError("option ids must be unique positive integers")
        if any(opt.vote_count < 0 for opt in voting.options):
            raise ValidationError("vote counts must not be negative")
        if voting.total_votes != voting.participant_count:
            raise ValidationError("vote counts must add up to the participant count")
        if voting.participant_count > capacity:
            raise ValidationError("participant count exceeds capacity")
        full = voting.participant_count == capacity
        if full == (voting.status is VotingStatus.ACTIVE):
            raise ValidationError(f"status {voting.status.value} does not match {voting.participant_count}/{capacity}")

        known = {normalize_identity(v) for v in (voters or []) if normalize_identity(v)}
        if len(known) > voting.participant_count:
            raise ValidationError("more voters than participants")

        stored = voting.snapshot()
        stored.title, stored.description, stored.capacity = title, description, capacity
        for opt, text in zip(stored.options, texts):
            opt.text = text
        stored.creator_id = stored.creator_id.strip()

        with self._registry:
            if stored.id in self._votings:
                raise ValidationError(f"voting {stored.id} already exists")
            self._register(stored, known, newest=False)
            snapshot = stored.snapshot()

        logger.info(f"Voting {stored.id} imported with status {stored.status.value}")
        return snapshot


__all__ = ["VotingStore", "validate_voting_input", "check_can_vote", "check_can_reveal"]
