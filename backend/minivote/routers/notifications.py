from fastapi import APIRouter, Depends

from minivote.models import NotificationOut
from minivote.state import get_coordinator
from minivote.voting.coordinator import VotingCoordinator

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
def recent_notifications(coordinator: VotingCoordinator = Depends(get_coordinator)):
    recent = getattr(coordinator.notifier, "recent", None)
    if recent is None:
        return []
    return [NotificationOut(title=n.title, body=n.body) for n in recent()]
