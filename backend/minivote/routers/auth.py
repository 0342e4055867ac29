# backend/minivote/routers/auth.py
from fastapi import APIRouter, Depends, Request, status

from minivote.core.limits import limiter, token_limit
from minivote.core.logger import voting_logger as logger
from minivote.models import IdentityResponse, WalletTokenRequest, WalletTokenResponse
from minivote.security import issue_wallet_token, require_identity

router = APIRouter(prefix="/auth", tags=["auth"])


def _client_ip(request: Request) -> str:
    client = request.client
    return client.host if client and client.host else "0.0.0.0"


# ---------------- Wallet session ----------------
@router.post("/wallet", response_model=WalletTokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(token_limit)
def wallet_session(request: Request, payload: WalletTokenRequest) -> WalletTokenResponse:
    """
    Issue a bearer token for a wallet the client has already connected.

    The address is trusted as supplied by the wallet collaborator; no
    signature challenge is performed here.
    """
    token = issue_wallet_token(payload.address)
    logger.info(f"Wallet session issued for {payload.address.strip()} from IP {_client_ip(request)}")
    return WalletTokenResponse(access_token=token)


@router.get("/me", response_model=IdentityResponse)
def me(identity: str = Depends(require_identity)) -> IdentityResponse:
    return IdentityResponse(identity=identity)
