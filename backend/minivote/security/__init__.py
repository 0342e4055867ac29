from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt

from minivote.core.settings import get_settings
from minivote.voting.identity import normalize_identity

LEGACY_PREFIX = "wallet:"


def _jwt_config() -> tuple[str, str]:
    settings = get_settings()
    secret = settings.jwt_secret or "your-secret-key"
    algorithm = settings.jwt_algorithm or "HS256"
    return secret, algorithm


def issue_wallet_token(address: str, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a bearer token whose subject is the connected wallet address."""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=get_settings().token_expire_minutes)
    secret, algorithm = _jwt_config()
    claims = {"sub": address.strip(), "iat": now, "exp": now + expires_delta}
    return jwt.encode(claims, secret, algorithm=algorithm)


def _parse_jwt_token(token: str) -> Optional[str]:
    secret, algorithm = _jwt_config()
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None

    address = payload.get("sub")
    if isinstance(address, str) and address.strip():
        return address.strip()
    return None


def _parse_token(token: str) -> Optional[str]:
    # Signed wallet tokens first, then the legacy "wallet:<address>" form.
    address = _parse_jwt_token(token)
    if address:
        return address
    if token.startswith(LEGACY_PREFIX):
        address = token[len(LEGACY_PREFIX):].strip()
        if address:
            return address
    return None


def get_current_identity(request: Request) -> Optional[str]:
    """Connected wallet of the caller, or ``None`` when no wallet is connected."""
    auth = request.headers.get("authorization", "")
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return _parse_token(parts[1])
    return None


def require_identity(identity: Optional[str] = Depends(get_current_identity)) -> str:
    if not normalize_identity(identity):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthenticated")
    return identity  # type: ignore[return-value]


__all__ = ["issue_wallet_token", "get_current_identity", "require_identity"]
