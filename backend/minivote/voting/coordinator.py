"""
Applies confirmed user actions to the store and ledger.

Every operation follows the same order: check the identity, preflight the
preconditions, await the external confirmation, apply atomically, notify.
Nothing is written before the confirmation resolves, so a failed or cancelled
submission leaves the store and ledger exactly as they were. Preconditions are
checked again when applying, because they may have changed while the
submission was in flight.
"""

from __future__ import annotations

from typing import Optional

from minivote.core.logger import voting_logger as logger
from minivote.voting.confirmation import Submit
from minivote.voting.errors import AlreadyVotedError
from minivote.voting.identity import require_identity
from minivote.voting.ledger import VoteLedger
from minivote.voting.models import Notification, Voting, VotingDraft
from minivote.voting.notifications import (
    LoggingNotifier,
    Notifier,
    results_revealed,
    vote_submitted,
    voting_created,
)
from minivote.voting.store import (
    VotingStore,
    check_can_reveal,
    check_can_vote,
    validate_voting_input,
)


class VotingCoordinator:
    def __init__(
        self,
        store: VotingStore,
        ledger: Optional[VoteLedger] = None,
        notifier: Optional[Notifier] = None,
        allow_truncated_creator_match: bool = True,
    ) -> None:
        self.store = store
        self.ledger = ledger if ledger is not None else VoteLedger(store)
        self.notifier: Notifier = notifier if notifier is not None else LoggingNotifier()
        self.allow_truncated_creator_match = allow_truncated_creator_match

    async def _notify(self, notification: Notification) -> None:
        # Fire-and-forget: the mutation is already applied and stays applied.
        try:
            await self.notifier.send(notification)
        except Exception:
            logger.exception(f"Notification {notification.title!r} could not be delivered")

    # ---------------- Create ----------------
    async def create_voting(self, identity: Optional[str], draft: VotingDraft, submit: Submit) -> Voting:
        require_identity(identity)
        validate_voting_input(draft.title, draft.description, draft.options, draft.capacity)

        confirmation = await submit()

        # stored as supplied; only comparisons are case-insensitive
        voting = self.store.create_voting(
            draft.title, draft.description, draft.options, draft.capacity, identity.strip()
        )
        logger.info(f"Create of voting {voting.id} confirmed by {confirmation.handle}")
        await self._notify(voting_created(voting.title, confirmation.handle))
        return voting

    # ---------------- Vote ----------------
    def _ensure_not_voted(self, voting_id: int, voter: str) -> None:
        if self.ledger.has_voted(voting_id, voter):
            logger.warning(f"Vote by {voter} rejected: ledger already holds a vote for voting {voting_id}")
            raise AlreadyVotedError(f"{voter} already voted in voting {voting_id}")

    async def cast_vote(self, identity: Optional[str], voting_id: int, option_id: int, submit: Submit) -> Voting:
        voter = require_identity(identity)
        current = self.store.get(voting_id)
        self._ensure_not_voted(voting_id, voter)
        check_can_vote(current, option_id)

        confirmation = await submit()

        with self.store.lock(voting_id):
            self._ensure_not_voted(voting_id, voter)
            voting = self.store.cast_vote(voting_id, option_id, voter)
            self.ledger.record_vote(voting_id, option_id, voter)

        option = voting.option(option_id)
        logger.info(f"Vote on voting {voting_id} confirmed by {confirmation.handle}")
        await self._notify(vote_submitted(option.text if option else str(option_id), confirmation.handle))
        return voting

    # ---------------- Reveal ----------------
    async def reveal_results(self, identity: Optional[str], voting_id: int, submit: Submit) -> Voting:
        requester = require_identity(identity)
        check_can_reveal(
            self.store.get(voting_id), requester, allow_truncated=self.allow_truncated_creator_match
        )

        confirmation = await submit()

        voting = self.store.reveal_results(
            voting_id, requester, allow_truncated=self.allow_truncated_creator_match
        )
        logger.info(f"Reveal of voting {voting_id} confirmed by {confirmation.handle}")
        await self._notify(results_revealed(voting.title, confirmation.handle))
        return voting


__all__ = ["VotingCoordinator"]
