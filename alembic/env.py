"""
Alembic environment for the product catalog.

The database URL comes from the service settings (DATABASE_URL or .env) and
can be overridden for a single run with `alembic -x db_url=... upgrade head`.
Online migrations connect through the service's own engine factory, so a
SQLite database gets the same foreign key and similarity() hooks as the API.
"""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool

from productdb import models  # noqa  # registers the catalog tables
from productdb.core.config import settings
from productdb.db.base import Base
from productdb.db.session import build_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_database_url() -> str:
    return context.get_x_argument(as_dictionary=True).get("db_url", settings.database_url)


def run_migrations_offline() -> None:
    """Emit the catalog DDL as SQL instead of applying it."""
    url = get_database_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = build_engine(get_database_url(), poolclass=pool.NullPool)

    try:
        with connectable.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                compare_type=True,
                # SQLite cannot ALTER constraints in place
                render_as_batch=connection.dialect.name == "sqlite",
            )

            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
