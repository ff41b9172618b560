from conftest import NOW
from mentorship.core.errors import StoreError
from mentorship.models import AuthSession
from mentorship.scheduler.cleanup_job import run_delete_expired_auth_sessions


def test_deletes_only_expired_auth_sessions(store):
    now_unix = int(NOW.timestamp())
    store.add(AuthSession(user_id=1, expiry=now_unix - 10))
    store.add(AuthSession(user_id=2, expiry=now_unix - 86400))
    keep = store.add(AuthSession(user_id=3, expiry=now_unix + 3600))
    store.add(AuthSession(user_id=4, expiry=now_unix))

    assert run_delete_expired_auth_sessions(store, now=NOW) == 2
    remaining = store.find(AuthSession, order_by=(AuthSession.id,))
    assert [r.user_id for r in remaining] == [keep.user_id, 4]


class BrokenStore:
    def delete_many(self, model, *criteria):
        raise StoreError("timeout")


def test_store_failure_is_swallowed():
    assert run_delete_expired_auth_sessions(BrokenStore(), now=NOW) == 0
