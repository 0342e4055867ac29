from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from minivote.core.limits import limiter, mutation_limit
from minivote.models import (
    CreateVotingRequest,
    OptionResult,
    RevealRequest,
    VoteRequest,
    VoteStatusResponse,
    VotingOptionOut,
    VotingOut,
    VotingResults,
)
from minivote.security import get_current_identity, require_identity
from minivote.state import get_coordinator
from minivote.voting.confirmation import confirmed
from minivote.voting.coordinator import VotingCoordinator
from minivote.voting.errors import InvalidStateError
from minivote.voting.identity import creator_matches
from minivote.voting.models import Voting, VotingDraft, VotingStatus
from minivote.voting.tally import compute_result_percentages, tally_pairs

router = APIRouter(prefix="/votings", tags=["votings"])


def _to_out(voting: Voting, coordinator: VotingCoordinator, identity: Optional[str]) -> VotingOut:
    my_vote = coordinator.ledger.voted_option(voting.id, identity)
    percents = compute_result_percentages(voting) if voting.is_revealed else {}
    options = [
        VotingOptionOut(
            id=opt.id,
            text=opt.text,
            vote_count=opt.vote_count if voting.is_revealed else None,
            percentage=percents.get(opt.id),
        )
        for opt in voting.options
    ]
    can_reveal = voting.status is VotingStatus.AWAITING_REVEAL and creator_matches(
        voting.creator_id, identity, allow_truncated=coordinator.allow_truncated_creator_match
    )
    return VotingOut(
        id=voting.id,
        title=voting.title,
        description=voting.description,
        creator=voting.creator_id,
        options=options,
        capacity=voting.capacity,
        participant_count=voting.participant_count,
        status=voting.status.value,
        is_active=voting.is_active,
        is_revealed=voting.is_revealed,
        my_vote=my_vote,
        can_vote=bool(voting.is_active and identity and my_vote is None),
        can_reveal=can_reveal,
    )


@router.get("", response_model=list[VotingOut])
def list_votings(
    identity: Optional[str] = Depends(get_current_identity),
    coordinator: VotingCoordinator = Depends(get_coordinator),
):
    return [_to_out(v, coordinator, identity) for v in coordinator.store.list()]


@router.get("/{voting_id}", response_model=VotingOut)
def get_voting(
    voting_id: int,
    identity: Optional[str] = Depends(get_current_identity),
    coordinator: VotingCoordinator = Depends(get_coordinator),
):
    return _to_out(coordinator.store.get(voting_id), coordinator, identity)


@router.post("", response_model=VotingOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(mutation_limit)
async def create_voting(
    request: Request,
    payload: CreateVotingRequest,
    identity: Optional[str] = Depends(get_current_identity),
    coordinator: VotingCoordinator = Depends(get_coordinator),
):
    draft = VotingDraft(
        title=payload.title,
        description=payload.description,
        options=list(payload.options),
        capacity=payload.capacity,
    )
    voting = await coordinator.create_voting(identity, draft, confirmed(payload.transaction_hash))
    return _to_out(voting, coordinator, identity)


@router.post("/{voting_id}/vote", response_model=VotingOut)
@limiter.limit(mutation_limit)
async def cast_vote(
    request: Request,
    voting_id: int,
    payload: VoteRequest,
    identity: Optional[str] = Depends(get_current_identity),
    coordinator: VotingCoordinator = Depends(get_coordinator),
):
    voting = await coordinator.cast_vote(
        identity, voting_id, payload.option_id, confirmed(payload.transaction_hash)
    )
    return _to_out(voting, coordinator, identity)


@router.post("/{voting_id}/reveal", response_model=VotingOut)
@limiter.limit(mutation_limit)
async def reveal_results(
    request: Request,
    voting_id: int,
    payload: RevealRequest,
    identity: Optional[str] = Depends(get_current_identity),
    coordinator: VotingCoordinator = Depends(get_coordinator),
):
    voting = await coordinator.reveal_results(identity, voting_id, confirmed(payload.transaction_hash))
    return _to_out(voting, coordinator, identity)


@router.get("/{voting_id}/results", response_model=VotingResults)
def voting_results(voting_id: int, coordinator: VotingCoordinator = Depends(get_coordinator)):
    voting = coordinator.store.get(voting_id)
    if not voting.is_revealed:
        raise InvalidStateError(f"results of voting {voting_id} are not revealed yet")
    texts = {opt.id: opt.text for opt in voting.options}
    results: List[OptionResult] = [
        OptionResult(option_id=option_id, text=texts[option_id], vote_count=count, percentage=pct)
        for option_id, count, pct in tally_pairs(voting)
    ]
    return VotingResults(voting_id=voting.id, participant_count=voting.participant_count, results=results)


@router.get("/{voting_id}/status", response_model=VoteStatusResponse)
def vote_status(
    voting_id: int,
    identity: str = Depends(require_identity),
    coordinator: VotingCoordinator = Depends(get_coordinator),
):
    coordinator.store.get(voting_id)
    option_id = coordinator.ledger.voted_option(voting_id, identity)
    return VoteStatusResponse(already_voted=option_id is not None, option_id=option_id)
