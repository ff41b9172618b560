"""Runs every 24h: delete auth sessions whose expiry has passed."""
import logging
from datetime import datetime

from mentorship.core.errors import StoreError
from mentorship.core.time import utc_now
from mentorship.db.store import Store
from mentorship.models.auth_session import AuthSession

logger = logging.getLogger(__name__)


def run_delete_expired_auth_sessions(store: Store, now: datetime | None = None) -> int:
    now = now or utc_now()
    try:
        deleted = store.delete_many(AuthSession, AuthSession.expiry < int(now.timestamp()))
    except StoreError as e:
        logger.warning("DeleteMany for expired auth sessions failed: %s", e, exc_info=True)
        return 0
    logger.info("Deleted %s expired auth sessions", deleted)
    return deleted
