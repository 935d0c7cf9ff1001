from typing import Dict

from sqlalchemy import create_engine, event

from unistay.core.permissions import Principal
from unistay.core.security import create_access_token
from unistay.models import User


def no_sleep(_seconds: float) -> None:
    return None


def principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, role=user.role)


def auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token(user.id, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


def make_sqlite_engine(url: str = "sqlite://", *, serialize_writes: bool = False, **kwargs):
    """
    SQLite engine for tests.

    ``serialize_writes`` opens every transaction with BEGIN IMMEDIATE so
    concurrent sessions queue on the database lock instead of deadlocking
    when upgrading from a read lock.
    """
    connect_args = {"check_same_thread": False}
    connect_args.update(kwargs.pop("connect_args", {}))
    engine = create_engine(url, connect_args=connect_args, **kwargs)

    if serialize_writes:
        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine
