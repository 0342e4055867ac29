"""
The asynchronous submit-then-confirm boundary.

A ``Submit`` callable performs the external step (typically sending a wallet
transaction) and resolves to a ``Confirmation`` once it is final. It raises
if the step fails or is cancelled, in which case nothing is applied.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from minivote.voting.errors import TransactionError
from minivote.voting.models import Confirmation

Submit = Callable[[], Awaitable[Confirmation]]


def confirmed(handle: str) -> Submit:
    """Submitter for an outcome the caller has already seen confirmed."""

    async def _submit() -> Confirmation:
        return Confirmation(handle=handle)

    return _submit


def failed(reason: str) -> Submit:
    async def _submit() -> Confirmation:
        raise TransactionError(reason)

    return _submit


__all__ = ["Submit", "confirmed", "failed"]
