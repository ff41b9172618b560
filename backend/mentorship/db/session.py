"""
Database engine and session factory.

No module-level engine: the process entrypoint builds one and hands the factory to the Store.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def create_db_engine(database_url: str, **kwargs) -> Engine:
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection so scheduler threads see the same in-memory database
            options["poolclass"] = StaticPool
        options.update(kwargs)
        return create_engine(database_url, **options)
    options = {
        "pool_size": 8,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_timeout": 30,
    }
    options.update(kwargs)
    return create_engine(database_url, **options)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
