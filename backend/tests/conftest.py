import os
import tempfile

# Keep the rotating log out of the working tree; must be set before the logger is built.
os.environ.setdefault("VOTING_LOG_FILE", os.path.join(tempfile.gettempdir(), "minivote-tests.log"))

import pytest  # noqa: E402

from minivote.core.settings import get_settings, reload_settings  # noqa: E402
from minivote.main import app  # noqa: E402
from minivote.state import reset_voting_state  # noqa: E402


def _reset_limits() -> None:
    limiter = getattr(app.state, "limiter", None)
    if limiter is not None:
        limiter.reset()


@pytest.fixture(autouse=True)
def fresh_voting_state():
    reload_settings()
    _reset_limits()
    reset_voting_state(app)
    yield
    get_settings.cache_clear()
    _reset_limits()
