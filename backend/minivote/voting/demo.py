from __future__ import annotations

from typing import List

from minivote.voting.models import Voting, VotingOption, VotingStatus
from minivote.voting.store import VotingStore


def _options(*pairs) -> List[VotingOption]:
    return [VotingOption(id=i, text=text, vote_count=votes) for i, (text, votes) in enumerate(pairs, start=1)]


DEMO_VOTINGS: List[Voting] = [
    Voting(
        id=1,
        title="Best Blockchain for DeFi",
        description=(
            "Which blockchain do you think is the best for DeFi applications? Consider factors like "
            "transaction speed, fees, ecosystem, and security when making your choice."
        ),
        creator_id="0x83A22d02D374F0Aec2C4425130922C93046aEe6a",
        options=_options(("Ethereum", 15), ("Base", 45), ("Polygon", 25), ("Arbitrum", 15)),
        capacity=100,
        participant_count=100,
        status=VotingStatus.AWAITING_REVEAL,
    ),
    Voting(
        id=2,
        title="Next Feature Priority",
        description=(
            "What feature should we implement next in our MiniKit app? Your vote will help us "
            "prioritize development efforts for the upcoming release."
        ),
        creator_id="0xabcd...efgh",
        options=_options(
            ("NFT Marketplace", 23), ("DeFi Staking", 31), ("Social Features", 18), ("Gaming Integration", 17)
        ),
        capacity=200,
        participant_count=89,
        status=VotingStatus.ACTIVE,
    ),
    Voting(
        id=3,
        title="Favorite Crypto Project",
        description=(
            "Which crypto project has the most potential in 2025? Consider innovation, adoption, "
            "and long-term sustainability in your decision."
        ),
        creator_id="0x9876...1234",
        options=_options(("Coinbase", 20), ("Uniswap", 15), ("Chainlink", 8), ("AAVE", 7)),
        capacity=50,
        participant_count=50,
        status=VotingStatus.REVEALED,
    ),
]


def seed_demo_votings(store: VotingStore) -> List[Voting]:
    """Load the demo votings into an empty store, keeping their display order."""
    return [store.import_voting(voting) for voting in DEMO_VOTINGS]


__all__ = ["DEMO_VOTINGS", "seed_demo_votings"]
