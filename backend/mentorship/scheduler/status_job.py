"""Runs every 30 min: expire stale pending sessions, complete started confirmed sessions."""
import logging
from datetime import datetime

from mentorship.core.errors import StoreError
from mentorship.core.status import SessionStatus, status_name
from mentorship.core.time import utc_now
from mentorship.db.store import Store, UpdateResult
from mentorship.models.session import MentorSession
from mentorship.services.session_state import COMPLETE, EXPIRE, complete_criteria, expire_criteria

logger = logging.getLogger(__name__)


def run_status_calculation(store: Store, now: datetime | None = None) -> dict[SessionStatus, UpdateResult | None]:
    """Two independent bulk updates; a failure in one does not stop the other."""
    now = now or utc_now()
    results: dict[SessionStatus, UpdateResult | None] = {}
    for transition, criteria in (
        (EXPIRE, expire_criteria(now)),
        (COMPLETE, complete_criteria(now)),
    ):
        target = transition.status
        try:
            result = store.update_many(MentorSession, criteria, transition.values())
        except StoreError as e:
            logger.warning("UpdateMany for %s status failed (tick continues): %s", status_name(target), e, exc_info=True)
            results[target] = None
            continue
        logger.info(
            "Matched %s and modified %s sessions for %s status",
            result.matched_count,
            result.modified_count,
            status_name(target),
        )
        results[target] = result
    return results
