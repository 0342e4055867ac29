"""
Identity helpers shared by the store, the ledger and the web layer.

Identity tokens are opaque wallet addresses handed over by the wallet
collaborator. They are compared case-insensitively. Some creators are only
known by an abbreviated display label such as ``0x1234...5678``; such a label
matches any full token that starts with its non-elided prefix.
"""

from __future__ import annotations

from typing import Optional

from minivote.voting.errors import IdentityRequiredError

ELLIPSIS = "..."


def normalize_identity(token: Optional[str]) -> str:
    return (token or "").strip().lower()


def require_identity(token: Optional[str]) -> str:
    """Return the normalized token or raise ``IdentityRequiredError``."""
    normalized = normalize_identity(token)
    if not normalized:
        raise IdentityRequiredError("a connected wallet identity is required")
    return normalized


def is_truncated(creator_id: str) -> bool:
    return ELLIPSIS in (creator_id or "")


def creator_matches(creator_id: Optional[str], requester_id: Optional[str], allow_truncated: bool = True) -> bool:
    creator = normalize_identity(creator_id)
    requester = normalize_identity(requester_id)
    if not creator or not requester:
        return False
    if is_truncated(creator):
        if not allow_truncated:
            return False
        # "...abcd" has an empty prefix and so matches any connected identity
        return requester.startswith(creator.split(ELLIPSIS, 1)[0])
    return requester == creator


__all__ = ["normalize_identity", "require_identity", "is_truncated", "creator_matches"]
