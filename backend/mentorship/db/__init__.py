from mentorship.db.base import Base
from mentorship.db.session import create_db_engine, create_session_factory
from mentorship.db.store import Store, UpdateResult

__all__ = ["Base", "create_db_engine", "create_session_factory", "Store", "UpdateResult"]
