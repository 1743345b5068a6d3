"""
Alembic Environment Configuration

The database URL comes from bookreview.config (DATABASE_URL), never from
alembic.ini, so migrations always target the same database the API uses.

MIGRATION WORKFLOW:
===================
1. Change the models in bookreview/models/
2. alembic revision --autogenerate -m "description"
3. Review the file written to alembic/versions/
4. alembic upgrade head
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context
from bookreview.config import get_settings
from bookreview.database import Base
from bookreview.models import Book, Review, User  # noqa: F401 - registers tables

settings = get_settings()

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# SQLite cannot ALTER constraints in place; batch mode rebuilds the table
RENDER_AS_BATCH = settings.is_sqlite


def run_migrations_offline() -> None:
    """
    Emit SQL without connecting.

    Usage:
        alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=RENDER_AS_BATCH,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect and apply migrations directly."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=RENDER_AS_BATCH,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
