from __future__ import annotations

import threading
from typing import Dict, Optional, Tuple

from minivote.core.logger import voting_logger as logger
from minivote.voting.errors import AlreadyVotedError, NotFoundError
from minivote.voting.identity import normalize_identity, require_identity
from minivote.voting.models import VoteRecord
from minivote.voting.store import VotingStore

LedgerKey = Tuple[str, int]


class VoteLedger:
    """
    Which option each identity picked, per voting.

    Records are written once and never changed. The ledger only consults the
    store to check that a voting/option pair exists; it never touches tallies.
    """

    def __init__(self, store: VotingStore) -> None:
        self._store = store
        self._records: Dict[LedgerKey, VoteRecord] = {}
        self._lock = threading.Lock()

    def key(self, voting_id: int, voter_id: str) -> LedgerKey:
        return (normalize_identity(voter_id), voting_id)

    def has_voted(self, voting_id: int, voter_id: Optional[str]) -> bool:
        if not normalize_identity(voter_id):
            return False
        return self.key(voting_id, voter_id) in self._records

    def voted_option(self, voting_id: int, voter_id: Optional[str]) -> Optional[int]:
        if not normalize_identity(voter_id):
            return None
        record = self._records.get(self.key(voting_id, voter_id))
        return record.option_id if record else None

    def record_vote(self, voting_id: int, option_id: int, voter_id: str) -> VoteRecord:
        voter = require_identity(voter_id)
        if not self._store.has_option(voting_id, option_id):
            raise NotFoundError(f"option {option_id} not found in voting {voting_id}")
        key = (voter, voting_id)
        with self._lock:
            if key in self._records:
                logger.warning(f"Duplicate vote by {voter} for voting {voting_id} refused by ledger")
                raise AlreadyVotedError(f"{voter} already voted in voting {voting_id}")
            record = VoteRecord(voting_id=voting_id, option_id=option_id)
            self._records[key] = record
        return record

    def records_for(self, voter_id: Optional[str]) -> Dict[int, int]:
        voter = normalize_identity(voter_id)
        if not voter:
            return {}
        with self._lock:
            return {
                voting_id: record.option_id
                for (identity, voting_id), record in self._records.items()
                if identity == voter
            }


__all__ = ["VoteLedger", "LedgerKey"]
