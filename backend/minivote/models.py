from pydantic import BaseModel, Field
from typing import List, Optional


class WalletTokenRequest(BaseModel):
    address: str = Field(min_length=3, max_length=128)


class WalletTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class IdentityResponse(BaseModel):
    identity: str


class VotingOptionOut(BaseModel):
    id: int
    text: str
    vote_count: Optional[int] = None  # hidden until revealed
    percentage: Optional[int] = None


class VotingOut(BaseModel):
    id: int
    title: str
    description: str
    creator: str
    options: List[VotingOptionOut]
    capacity: int
    participant_count: int
    status: str
    is_active: bool
    is_revealed: bool
    my_vote: Optional[int] = None
    can_vote: bool = False
    can_reveal: bool = False


class CreateVotingRequest(BaseModel):
    title: str
    description: str
    options: List[str]
    capacity: int
    transaction_hash: str = Field(min_length=1, max_length=256)


class VoteRequest(BaseModel):
    option_id: int
    transaction_hash: str = Field(min_length=1, max_length=256)


class RevealRequest(BaseModel):
    transaction_hash: str = Field(min_length=1, max_length=256)


class OptionResult(BaseModel):
    option_id: int
    text: str
    vote_count: int
    percentage: int


class VotingResults(BaseModel):
    voting_id: int
    participant_count: int
    results: List[OptionResult]


class VoteStatusResponse(BaseModel):
    already_voted: bool
    option_id: Optional[int] = None


class NotificationOut(BaseModel):
    title: str
    body: str
