# backend/minivote/main.py
import os
from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response

# rate limiting
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from minivote.core.limits import limiter
from minivote.core.logger import voting_logger as logger
from minivote.state import reset_voting_state
from minivote.voting.errors import VotingError

# ---- Allowed origins (env-overridable) ----
DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

def _load_allowed_origins() -> List[str]:
    """
    Optionally override via:
      ALLOWED_ORIGINS="https://minivote.example"
      (comma-separated list if multiple)
    """
    raw = os.getenv("ALLOWED_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or DEFAULT_ALLOWED_ORIGINS

ALLOWED_ORIGINS = _load_allowed_origins()

# ---- Default security headers ----
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'self'; frame-ancestors 'none'; object-src 'none'",
}

app = FastAPI(title="MiniVote Voting Coordinator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "content-type"],
    max_age=3600,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    response = JSONResponse(
        status_code=429,
        content={"error": "too_many_requests", "detail": "Try again later."},
    )
    for header, value in (getattr(exc, "headers", {}) or {}).items():
        response.headers.setdefault(header, value)
    return response


@app.exception_handler(VotingError)
def _voting_error_handler(request: Request, exc: VotingError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} rejected: {exc.code} ({exc.message})")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )

# ---- Security headers middleware ----
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response

# ---- HTTP hardening: only GET/POST, JSON bodies ----
@app.middleware("http")
async def check_http_hardening(request: Request, call_next):
    if request.method in ["PUT", "DELETE", "PATCH"]:
        return JSONResponse(
            status_code=405,
            content={"detail": "Method Not Allowed"},
            headers={"Allow": "GET, POST, OPTIONS"},
        )

    if request.method == "POST":
        content_type = request.headers.get("content-type", "")
        if not content_type.lower().startswith("application/json"):
            return JSONResponse(
                status_code=415,
                content={"detail": "Unsupported Media Type. Must be application/json"},
            )

    return await call_next(request)

# ---- Health endpoint (used by tests and curl) ----
@app.get("/health")
def health():
    return {"ok": True}

# ---- Voting state: store, ledger and notification outbox ----
reset_voting_state(app)

# ---- Routers ----
from minivote.routers import auth, notifications, votings  # noqa: E402

app.include_router(auth.router)
app.include_router(votings.router)
app.include_router(notifications.router)
