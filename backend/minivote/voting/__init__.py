from minivote.voting.confirmation import Submit, confirmed
from minivote.voting.coordinator import VotingCoordinator
from minivote.voting.errors import (
    AlreadyVotedError,
    IdentityRequiredError,
    InvalidStateError,
    NotActiveError,
    NotAuthorizedError,
    NotFoundError,
    TransactionError,
    ValidationError,
    VotingError,
)
from minivote.voting.identity import creator_matches, normalize_identity, require_identity
from minivote.voting.ledger import VoteLedger
from minivote.voting.models import (
    Confirmation,
    Notification,
    VoteRecord,
    Voting,
    VotingDraft,
    VotingOption,
    VotingStatus,
)
from minivote.voting.store import VotingStore
from minivote.voting.tally import compute_result_percentages

__all__ = [
    "Submit",
    "confirmed",
    "VotingCoordinator",
    "VotingError",
    "ValidationError",
    "NotFoundError",
    "NotActiveError",
    "AlreadyVotedError",
    "NotAuthorizedError",
    "InvalidStateError",
    "IdentityRequiredError",
    "TransactionError",
    "creator_matches",
    "normalize_identity",
    "require_identity",
    "VoteLedger",
    "Confirmation",
    "Notification",
    "VoteRecord",
    "Voting",
    "VotingDraft",
    "VotingOption",
    "VotingStatus",
    "VotingStore",
    "compute_result_percentages",
]
