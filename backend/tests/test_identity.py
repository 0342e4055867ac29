import pytest

from minivote.voting.errors import IdentityRequiredError
from minivote.voting.identity import creator_matches, is_truncated, normalize_identity, require_identity

FULL = "0x83A22d02D374F0Aec2C4425130922C93046aEe6a"


def test_normalize_and_require():
    assert normalize_identity("  0xABC ") == "0xabc"
    assert normalize_identity(None) == ""
    assert require_identity("0xABC") == "0xabc"
    with pytest.raises(IdentityRequiredError):
        require_identity("   ")
    with pytest.raises(IdentityRequiredError):
        require_identity(None)


def test_full_identity_matches_case_insensitively():
    assert creator_matches(FULL, FULL.lower())
    assert creator_matches(FULL.lower(), FULL.upper().replace("0X", "0x"))
    assert not creator_matches(FULL, FULL[:-1] + "b")


def test_truncated_label_matches_prefix():
    assert is_truncated("0x1234...5678")
    assert creator_matches("0x1234...5678", "0x1234ffffffffffffffffffffffffffffffff9999")
    assert creator_matches("0xABCD...efgh", "0xabcd0000")
    assert not creator_matches("0x1234...5678", "0x1235ffff")


def test_truncated_label_without_prefix_matches_any_connected_identity():
    assert creator_matches("...5678", "0x12345678")
    assert creator_matches("...5678", "0xffff")
    assert not creator_matches("...5678", "")
    assert not creator_matches("...5678", "0x12345678", allow_truncated=False)


def test_truncated_matching_can_be_disabled():
    assert not creator_matches("0x1234...5678", "0x1234ffff", allow_truncated=False)
    assert creator_matches(FULL, FULL, allow_truncated=False)


@pytest.mark.parametrize("creator, requester", [(FULL, None), (FULL, ""), ("", FULL), (None, FULL)])
def test_missing_identities_never_match(creator, requester):
    assert not creator_matches(creator, requester)
