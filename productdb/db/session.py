from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from productdb.core.config import settings
from productdb.services.trigram import similarity


def install_sqlite_hooks(engine: Engine) -> None:
    """
    Enforce foreign keys and provide pg_trgm's `similarity()` on every
    new SQLite connection.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("similarity", 2, similarity, deterministic=True)
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(
            database_url,
            future=True,
            echo=echo,
            connect_args=connect_args,
            **kwargs,
        )
        install_sqlite_hooks(engine)
        return engine

    if "poolclass" not in kwargs:
        kwargs.update(pool_size=5, max_overflow=10)

    return create_engine(
        database_url,
        future=True,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=300,
        connect_args={
            "keepalives": 1,
            "keepalives_idle": 30,
            "keepalives_interval": 10,
            "keepalives_count": 5,
        },
        **kwargs,
    )


engine = build_engine(settings.database_url, echo=settings.sql_echo)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
