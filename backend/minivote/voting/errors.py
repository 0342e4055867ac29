from __future__ import annotations


class VotingError(Exception):
    """Base class for every rejection raised by the voting core.

    ``code`` is a stable machine-readable identifier and ``status_code`` the
    HTTP status the web layer answers with.
    """

    code = "voting_error"
    status_code = 400

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationError(VotingError):
    code = "validation_error"
    status_code = 400


class NotFoundError(VotingError):
    code = "not_found"
    status_code = 404


class NotActiveError(VotingError):
    code = "not_active"
    status_code = 409


class AlreadyVotedError(VotingError):
    code = "already_voted"
    status_code = 409


class NotAuthorizedError(VotingError):
    code = "forbidden"
    status_code = 403


class InvalidStateError(VotingError):
    code = "invalid_state"
    status_code = 409


class IdentityRequiredError(VotingError):
    code = "unauthenticated"
    status_code = 401


class TransactionError(VotingError):
    """The external submission failed; the core was never invoked."""

    code = "transaction_failed"
    status_code = 502


__all__ = [
    "VotingError",
    "ValidationError",
    "NotFoundError",
    "NotActiveError",
    "AlreadyVotedError",
    "NotAuthorizedError",
    "InvalidStateError",
    "IdentityRequiredError",
    "TransactionError",
]
