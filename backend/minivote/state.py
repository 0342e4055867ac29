from fastapi import FastAPI, Request

from minivote.core.logger import voting_logger as logger
from minivote.core.settings import Settings, get_settings
from minivote.voting.coordinator import VotingCoordinator
from minivote.voting.demo import seed_demo_votings
from minivote.voting.notifications import OutboxNotifier
from minivote.voting.store import VotingStore


def build_coordinator(settings: Settings) -> VotingCoordinator:
    store = VotingStore()
    if settings.seed_demo_votings:
        seeded = seed_demo_votings(store)
        logger.info(f"Seeded {len(seeded)} demo votings")
    return VotingCoordinator(
        store,
        notifier=OutboxNotifier(settings.notification_outbox_size),
        allow_truncated_creator_match=settings.allow_truncated_creator_match,
    )


def reset_voting_state(app: FastAPI) -> VotingCoordinator:
    """Replace the in-memory votings, ledger and outbox with fresh ones."""
    coordinator = build_coordinator(get_settings())
    app.state.coordinator = coordinator
    return coordinator


def get_coordinator(request: Request) -> VotingCoordinator:
    return request.app.state.coordinator


__all__ = ["build_coordinator", "reset_voting_state", "get_coordinator"]
